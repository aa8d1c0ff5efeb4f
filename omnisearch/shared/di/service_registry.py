"""
Service registry for dependency injection.

Maps each service type to how it is built and how long an instance lives.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type, Union


class ServiceLifetime(Enum):
    """How long a resolved instance is reused."""

    SINGLETON = "singleton"
    SCOPED = "scoped"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ServiceRegistration:
    """
    Registration information for a service.

    ``implementation`` is either a class, whose constructor is auto-wired,
    or a zero-argument callable returning the instance.
    """

    service_type: Type
    implementation: Union[Type, Callable[[], Any]]
    lifetime: ServiceLifetime

    @property
    def name(self) -> str:
        return getattr(self.service_type, "__name__", repr(self.service_type))

    @property
    def is_class(self) -> bool:
        return isinstance(self.implementation, type)


class ServiceRegistry:
    """
    Registry for managing service registrations.

    Registering a type again replaces the earlier registration, which is
    how tests swap in fakes after the default wiring.
    """

    def __init__(self):
        self._registrations: Dict[Type, ServiceRegistration] = {}

    def register(
        self,
        service_type: Type,
        implementation: Union[Type, Callable[[], Any]],
        lifetime: ServiceLifetime = ServiceLifetime.TRANSIENT
    ) -> ServiceRegistration:
        """
        Register a service type with its implementation.

        Args:
            service_type: Type callers resolve
            implementation: Class or factory producing the instance
            lifetime: Service lifetime

        Returns:
            ServiceRegistration: The stored registration

        Raises:
            ValueError: If the implementation is neither a class nor callable
        """
        if not callable(implementation):
            raise ValueError(f"Invalid implementation type: {type(implementation)}")
        registration = ServiceRegistration(service_type, implementation, lifetime)
        self._registrations[service_type] = registration
        return registration

    def get_registration(self, service_type: Type) -> Optional[ServiceRegistration]:
        return self._registrations.get(service_type)

    def is_registered(self, service_type: Type) -> bool:
        return service_type in self._registrations

    def registered_names(self) -> Dict[str, str]:
        """Service name to lifetime, in registration order."""
        return {
            registration.name: registration.lifetime.value
            for registration in self._registrations.values()
        }
