"""
Cached location source.

Location is resolved elsewhere (device positioning, IP lookup); this
provider only keeps the last snapshot it was given.
"""

from typing import Optional

from ...core.entities import LocationContext
from ...core.interfaces import LocationProviderInterface
from ...shared.logging import get_logger

logger = get_logger(__name__)


class CachedLocationProvider(LocationProviderInterface):
    """
    Keeps the last known location.

    When a fallback is configured it is returned until a real location
    arrives; without one the provider reports no location at all.
    """

    def __init__(
        self,
        initial: Optional[LocationContext] = None,
        fallback: Optional[LocationContext] = None
    ):
        """
        Initialize the provider.

        Args:
            initial: Location already known at start-up
            fallback: Location used when nothing better is known
        """
        self._location = initial
        self.fallback = fallback

    def update(self, location: Optional[LocationContext]) -> None:
        """Replace the cached snapshot; None forgets it."""
        self._location = location
        if location is not None:
            logger.debug(
                "Location updated",
                city=location.city,
                country=location.country,
                is_fallback=location.is_fallback
            )

    def use_fallback(self) -> Optional[LocationContext]:
        """Cache the fallback location, e.g. after positioning was denied."""
        self._location = self.fallback
        return self._location

    def get_last_known_location(self) -> Optional[LocationContext]:
        if self._location is not None:
            return self._location
        return self.fallback
