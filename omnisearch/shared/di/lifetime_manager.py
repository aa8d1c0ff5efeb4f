"""
Lifetime manager for dependency injection.

This module provides the lifetime manager that caches service instances
according to their lifetime and releases them on disposal.
"""

import inspect
from typing import Any, Callable, Dict, List, Optional, Type

from ..logging import get_logger
from .service_registry import ServiceLifetime, ServiceRegistration

logger = get_logger(__name__)


class LifetimeManager:
    """
    Manager for service instance lifecycle.

    Instances exposing ``aclose()`` or ``dispose()`` are tracked and
    released, most recently created first, when the manager is disposed.
    """

    def __init__(self):
        """Initialize lifetime manager."""
        self._singleton_instances: Dict[Type, Any] = {}
        self._scoped_instances: Dict[Any, Dict[Type, Any]] = {}
        self._disposables: List[Any] = []

    def get_instance(
        self,
        registration: ServiceRegistration,
        factory: Callable[[], Any],
        scope: Optional[Any] = None
    ) -> Any:
        """
        Get or create service instance.

        Args:
            registration: Service registration
            factory: Factory function for creating instance
            scope: Optional scope for scoped services

        Returns:
            Any: Service instance

        Raises:
            ValueError: If a scoped service is resolved outside a scope
        """
        if registration.lifetime == ServiceLifetime.SINGLETON:
            if registration.service_type not in self._singleton_instances:
                self._singleton_instances[registration.service_type] = self._create(factory)
            return self._singleton_instances[registration.service_type]

        if registration.lifetime == ServiceLifetime.SCOPED:
            if scope is None:
                raise ValueError("Scope is required for scoped services")
            scope_instances = self._scoped_instances.setdefault(scope, {})
            if registration.service_type not in scope_instances:
                scope_instances[registration.service_type] = self._create(factory)
            return scope_instances[registration.service_type]

        return self._create(factory)

    def _create(self, factory: Callable[[], Any]) -> Any:
        instance = factory()
        if hasattr(instance, "aclose") or hasattr(instance, "dispose"):
            self._disposables.append(instance)
        return instance

    async def dispose_scope(self, scope: Any) -> None:
        """
        Release all instances created in a scope.

        Args:
            scope: Scope to dispose
        """
        instances = self._scoped_instances.pop(scope, {})
        for instance in reversed(list(instances.values())):
            if instance in self._disposables:
                self._disposables.remove(instance)
                await self._release(instance)

    async def dispose_all(self) -> None:
        """Release all tracked instances and forget cached ones."""
        disposables = list(reversed(self._disposables))
        self._disposables.clear()
        self._singleton_instances.clear()
        self._scoped_instances.clear()
        for instance in disposables:
            await self._release(instance)

    @staticmethod
    async def _release(instance: Any) -> None:
        try:
            if hasattr(instance, "aclose"):
                await instance.aclose()
            else:
                result = instance.dispose()
                if inspect.isawaitable(result):
                    await result
        except Exception as e:
            logger.exception(
                "Failed to release service instance",
                exc_info=e,
                service=type(instance).__name__
            )
