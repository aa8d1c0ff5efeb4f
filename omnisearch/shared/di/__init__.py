"""Dependency injection."""

from .container import Container
from .service_registry import ServiceLifetime

__all__ = ['Container', 'ServiceLifetime']
