"""
Interfaces for the collaborators consumed by the search orchestrator.

Identity, location and navigation are owned by other parts of the product;
the orchestrator only needs the narrow surface defined here.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..entities import LocationContext

SessionListener = Callable[[str, Optional[str]], None]


class IdentityProviderInterface(ABC):
    """Source of the signed-in user's identity."""

    @abstractmethod
    async def get_current_user_id(self) -> Optional[str]:
        """
        Get the identity of the current user.

        Returns:
            Optional[str]: User id, or None for anonymous callers
        """
        pass

    @abstractmethod
    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Listen to session lifecycle events.

        Args:
            listener: Called with the event name and the user id

        Returns:
            Callable[[], None]: Unsubscribe function
        """
        pass


class LocationProviderInterface(ABC):
    """Source of the last known location."""

    @abstractmethod
    def get_last_known_location(self) -> Optional[LocationContext]:
        """
        Get the cached location snapshot.

        Returns:
            Optional[LocationContext]: Snapshot, or None when unknown
        """
        pass


class NavigatorInterface(ABC):
    """Moves the user between views."""

    @abstractmethod
    def navigate(self, address: str) -> None:
        """
        Navigate to an address.

        Args:
            address: Path with query string
        """
        pass
