"""Application services."""

from .search_orchestrator import SearchOrchestrator

__all__ = ['SearchOrchestrator']
