"""
Search state store.

Holds the one SearchSessionState of a UI session and changes it only
through the reducer. Each store is an ordinary object, so every test and
every container scope can have its own.
"""

from typing import Callable, List

from ...core.entities import (
    INITIAL_STATE,
    ResolveFailure,
    ResolveSuccess,
    SearchAction,
    SearchSessionState
)
from ...domain.search import reduce_search_state
from ...shared.logging import get_logger

logger = get_logger(__name__)

StateListener = Callable[[SearchSessionState], None]
Reducer = Callable[[SearchSessionState, SearchAction], SearchSessionState]


class SearchStateStore:
    """
    Reducer-backed state container with subscriptions.

    Listeners are called synchronously after every change, in the order
    they subscribed. Actions that leave the state untouched notify nobody.
    """

    def __init__(
        self,
        reducer: Reducer = reduce_search_state,
        initial_state: SearchSessionState = INITIAL_STATE
    ):
        """
        Initialize the store.

        Args:
            reducer: State transition function
            initial_state: Starting state
        """
        self._reducer = reducer
        self._state = initial_state
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> SearchSessionState:
        """The current state."""
        return self._state

    def dispatch(self, action: SearchAction) -> SearchSessionState:
        """
        Apply an action.

        Args:
            action: One of StartSearch, ResolveSuccess, ResolveFailure, Clear

        Returns:
            SearchSessionState: State after the action
        """
        previous = self._state
        next_state = self._reducer(previous, action)

        if next_state is previous:
            if isinstance(action, (ResolveSuccess, ResolveFailure)):
                logger.debug(
                    "Discarded response for superseded search",
                    request_id=action.request_id,
                    active_request_id=previous.active_request_id
                )
            return previous

        self._state = next_state
        logger.debug(
            "Search state changed",
            action=type(action).__name__,
            status=next_state.status.value,
            request_id=next_state.active_request_id
        )
        self._notify()
        return next_state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Args:
            listener: Called with the new state after every change

        Returns:
            Callable[[], None]: Function removing the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # a listener may dispatch; later listeners then see the newer state
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.exception(
                    "Search state listener failed",
                    exc_info=e,
                    listener=getattr(listener, "__qualname__", repr(listener))
                )
