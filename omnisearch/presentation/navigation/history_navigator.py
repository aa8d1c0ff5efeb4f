"""
In-memory navigation history.

Stands in for a browser router: every navigation is appended to a
history list that views and tests can inspect.
"""

from typing import List, Optional

from ...core.interfaces import NavigatorInterface
from ...shared.logging import get_logger

logger = get_logger(__name__)


class HistoryNavigator(NavigatorInterface):
    """Navigator that records addresses instead of rendering pages."""

    def __init__(self, initial_address: str = "/"):
        self.history: List[str] = [initial_address]

    @property
    def current_address(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def navigate(self, address: str) -> None:
        logger.debug("Navigate", address=address, previous=self.current_address)
        self.history.append(address)
