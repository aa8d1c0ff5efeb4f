"""
In-process session identity.

Holds the signed-in user for one client session and tells listeners
when a session starts or ends.
"""

from typing import Callable, List, Optional

from ...core.interfaces import IdentityProviderInterface, SessionListener
from ...shared.logging import get_logger

logger = get_logger(__name__)

SIGN_IN_EVENT = "sign_in"
SIGN_OUT_EVENT = "sign_out"


class SessionIdentityProvider(IdentityProviderInterface):
    """Identity provider backed by an in-memory session."""

    def __init__(self, user_id: Optional[str] = None):
        self._user_id = user_id
        self._listeners: List[SessionListener] = []

    async def get_current_user_id(self) -> Optional[str]:
        return self._user_id

    def sign_in(self, user_id: str) -> None:
        """
        Start a session for a user.

        Args:
            user_id: Identity of the user

        Raises:
            ValueError: If the user id is blank
        """
        if not user_id or not user_id.strip():
            raise ValueError("user_id must not be blank")
        self._user_id = user_id
        logger.info("User signed in", user_id=user_id)
        self._emit(SIGN_IN_EVENT, user_id)

    def sign_out(self) -> None:
        """End the current session; a no-op when nobody is signed in."""
        if self._user_id is None:
            return
        user_id = self._user_id
        self._user_id = None
        logger.info("User signed out", user_id=user_id)
        self._emit(SIGN_OUT_EVENT, user_id)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str, user_id: Optional[str]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, user_id)
            except Exception as e:
                logger.exception("Session listener failed", exc_info=e, session_event=event)
