"""
Domain service for search session state transitions.

This module contains the pure transition function behind the search state
store. It is also the one place where late answers for superseded
requests are discarded.
"""

from ...core.entities import (
    INITIAL_STATE,
    Clear,
    ErrorKind,
    ResolveFailure,
    ResolveSuccess,
    SearchAction,
    SearchSessionState,
    SearchStatus,
    StartSearch
)

DEFAULT_ERROR_MESSAGE = "An unknown error occurred during search"


class SearchStateReducer:
    """
    Pure state transitions for the current search.

    No I/O and no mutation: every call returns either the same state object
    (nothing changed) or a brand new one.
    """

    @staticmethod
    def reduce(state: SearchSessionState, action: SearchAction) -> SearchSessionState:
        """
        Apply an action to a state.

        Args:
            state: Current state
            action: Action to apply

        Returns:
            SearchSessionState: Next state; ``state`` itself for dropped actions

        Raises:
            TypeError: If the action type is unknown
        """
        if isinstance(action, StartSearch):
            # Fresh state, nothing carried over from the previous search.
            return SearchSessionState(
                status=SearchStatus.LOADING,
                active_request_id=action.request_id,
                query=action.query
            )

        if isinstance(action, ResolveSuccess):
            if SearchStateReducer.is_stale(state, action.request_id):
                return state
            outcome = action.outcome
            return SearchSessionState(
                status=SearchStatus.SUCCESS,
                active_request_id=state.active_request_id,
                query=state.query,
                results=tuple(outcome.results),
                total_results=outcome.total_results,
                processing_time=outcome.processing_time,
                suggestions=tuple(outcome.suggestions)
            )

        if isinstance(action, ResolveFailure):
            if SearchStateReducer.is_stale(state, action.request_id):
                return state
            return SearchSessionState(
                status=SearchStatus.ERROR,
                active_request_id=state.active_request_id,
                query=state.query,
                error_message=action.error_message or DEFAULT_ERROR_MESSAGE,
                error_kind=action.error_kind or ErrorKind.INTERNAL
            )

        if isinstance(action, Clear):
            return INITIAL_STATE

        raise TypeError(f"Unknown search action: {action!r}")

    @staticmethod
    def is_stale(state: SearchSessionState, request_id: str) -> bool:
        """
        Check whether an answer belongs to a superseded request.

        After a Clear there is no active request, so every answer is stale.

        Args:
            state: Current state
            request_id: Request the answer belongs to

        Returns:
            bool: True if the answer must be discarded
        """
        return state.active_request_id is None or request_id != state.active_request_id


reduce_search_state = SearchStateReducer.reduce
