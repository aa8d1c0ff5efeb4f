"""
Dependency injection container.

Registrations are shared between a container and the scopes created from
it; instances are cached according to their lifetime.
"""

import inspect
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional, Type, TypeVar, Union, get_type_hints

from .lifetime_manager import LifetimeManager
from .service_registry import ServiceLifetime, ServiceRegistration, ServiceRegistry

T = TypeVar('T')


class Container:
    """
    Dependency injection container.

    Singletons belong to the container that created them, so two
    containers never share state. Registration methods return the
    container for chaining.
    """

    def __init__(self):
        self._registry = ServiceRegistry()
        self._lifetime_manager = LifetimeManager()
        self._current_scope: Optional[Any] = None

    def register(
        self,
        service_type: Type[T],
        implementation: Union[Type[T], Callable[[], T]],
        lifetime: ServiceLifetime = ServiceLifetime.TRANSIENT
    ) -> 'Container':
        """
        Register a service type with its implementation.

        Args:
            service_type: Type callers resolve
            implementation: Class to auto-wire, or zero-argument factory
            lifetime: Service lifetime

        Returns:
            Container: Self for method chaining
        """
        self._registry.register(service_type, implementation, lifetime)
        return self

    def register_singleton(
        self,
        service_type: Type[T],
        implementation: Union[Type[T], Callable[[], T]]
    ) -> 'Container':
        """Register a service created once per container."""
        return self.register(service_type, implementation, ServiceLifetime.SINGLETON)

    def register_scoped(
        self,
        service_type: Type[T],
        implementation: Union[Type[T], Callable[[], T]]
    ) -> 'Container':
        """Register a service created once per scope."""
        return self.register(service_type, implementation, ServiceLifetime.SCOPED)

    def register_transient(
        self,
        service_type: Type[T],
        implementation: Union[Type[T], Callable[[], T]]
    ) -> 'Container':
        return self.register(service_type, implementation, ServiceLifetime.TRANSIENT)

    def register_instance(self, service_type: Type[T], instance: T) -> 'Container':
        """Register an already built object as a singleton."""
        return self.register(service_type, lambda: instance, ServiceLifetime.SINGLETON)

    def is_registered(self, service_type: Type) -> bool:
        return self._registry.is_registered(service_type)

    def registered_services(self) -> Dict[str, str]:
        return self._registry.registered_names()

    def resolve(self, service_type: Type[T]) -> T:
        """
        Resolve a service instance.

        Args:
            service_type: Type of service to resolve

        Returns:
            T: Resolved service instance

        Raises:
            ValueError: If service type is not registered
        """
        registration = self._registry.get_registration(service_type)
        if not registration:
            raise ValueError(f"Service type {service_type} is not registered")

        return self._lifetime_manager.get_instance(
            registration=registration,
            factory=self._factory_for(registration),
            scope=self._current_scope
        )

    def create_scope(self) -> 'Container':
        """
        Create a new scope.

        Returns:
            Container: Container sharing registrations and singletons
        """
        scoped_container = Container()
        scoped_container._registry = self._registry
        scoped_container._lifetime_manager = self._lifetime_manager
        scoped_container._current_scope = object()
        return scoped_container

    @asynccontextmanager
    async def scope(self) -> AsyncIterator['Container']:
        """
        Run a block inside a scope and release its services afterwards.

        Yields:
            Container: Scoped container
        """
        scoped_container = self.create_scope()
        try:
            yield scoped_container
        finally:
            await self._lifetime_manager.dispose_scope(scoped_container._current_scope)

    def _factory_for(self, registration: ServiceRegistration) -> Callable[[], Any]:
        if registration.is_class:
            return lambda: self._create_instance(registration.implementation)
        return registration.implementation

    def _create_instance(self, implementation_type: Type) -> Any:
        """
        Create instance of implementation type.

        Constructor parameters whose annotated type is registered are
        resolved; the others keep their defaults.

        Args:
            implementation_type: Type to create instance of

        Returns:
            Any: Created instance

        Raises:
            ValueError: If a required parameter cannot be resolved
        """
        constructor = implementation_type.__init__
        signature = inspect.signature(constructor)
        type_hints = get_type_hints(constructor)

        dependencies: Dict[str, Any] = {}
        for name, parameter in list(signature.parameters.items())[1:]:
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue
            param_type = type_hints.get(name)
            if param_type is not None and self.is_registered(param_type):
                dependencies[name] = self.resolve(param_type)
            elif parameter.default is parameter.empty:
                raise ValueError(
                    f"Cannot resolve parameter '{name}' of {implementation_type.__name__}"
                )

        return implementation_type(**dependencies)

    async def dispose(self) -> None:
        """Release all tracked instances."""
        await self._lifetime_manager.dispose_all()
