"""
Tests for the search state reducer and store.
"""

import pytest

from omnisearch.application.state import SearchStateStore
from omnisearch.core.entities import (
    INITIAL_STATE,
    Clear,
    ErrorKind,
    ResolveFailure,
    ResolveSuccess,
    SearchStatus,
    StartSearch,
    Success
)
from omnisearch.domain.search import SearchStateReducer, reduce_search_state
from omnisearch.domain.search.search_state_reducer import DEFAULT_ERROR_MESSAGE

from conftest import make_success


class TestSearchStateReducer:
    """Test suite for the pure state transitions."""

    def test_start_search_enters_loading(self):
        state = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "phone repair"))

        assert state.status == SearchStatus.LOADING
        assert state.active_request_id == "req-1"
        assert state.query == "phone repair"
        assert state.results == ()

    def test_resolve_success_populates_payload(self):
        loading = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "phone repair"))
        state = reduce_search_state(loading, ResolveSuccess("req-1", make_success("Screen fix")))

        assert state.status == SearchStatus.SUCCESS
        assert state.active_request_id == "req-1"
        assert state.query == "phone repair"
        assert state.total_results == 1
        assert state.results[0].title == "Screen fix"
        assert state.processing_time == 0.25

    def test_resolve_failure_enters_error(self):
        loading = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "q"))
        state = reduce_search_state(
            loading,
            ResolveFailure("req-1", "Search service returned HTTP 500", ErrorKind.REMOTE)
        )

        assert state.status == SearchStatus.ERROR
        assert state.error_message == "Search service returned HTTP 500"
        assert state.error_kind == ErrorKind.REMOTE

    def test_resolve_failure_without_message_uses_default(self):
        loading = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "q"))
        state = reduce_search_state(loading, ResolveFailure("req-1", ""))

        assert state.error_message == DEFAULT_ERROR_MESSAGE
        assert state.error_kind == ErrorKind.INTERNAL

    @pytest.mark.parametrize("action", [
        ResolveSuccess("old", make_success("stale")),
        ResolveFailure("old", "stale failure"),
    ])
    def test_stale_resolution_is_discarded(self, action):
        loading = reduce_search_state(INITIAL_STATE, StartSearch("new", "b"))

        assert reduce_search_state(loading, action) is loading

    @pytest.mark.parametrize("action", [
        ResolveSuccess("req-1", make_success("late")),
        ResolveFailure("req-1", "late failure"),
    ])
    def test_resolution_after_clear_is_discarded(self, action):
        loading = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "q"))
        cleared = reduce_search_state(loading, Clear())

        assert reduce_search_state(cleared, action) is cleared
        assert cleared == INITIAL_STATE

    def test_start_search_wipes_previous_success(self):
        state = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "a"))
        previous = make_success("one", "two")
        state = reduce_search_state(
            state,
            ResolveSuccess("req-1", Success(previous.results, 2, 0.5, ("phone case",)))
        )
        assert state.suggestions == ("phone case",)
        fresh = reduce_search_state(state, StartSearch("req-2", "b"))

        assert fresh.results == ()
        assert fresh.total_results == 0
        assert fresh.suggestions == ()
        assert fresh.processing_time is None
        assert fresh.error_message is None

    def test_start_search_wipes_previous_error(self):
        state = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "a"))
        state = reduce_search_state(state, ResolveFailure("req-1", "boom", ErrorKind.TRANSPORT))
        fresh = reduce_search_state(state, StartSearch("req-2", "b"))

        assert fresh.error_message is None
        assert fresh.error_kind is None
        assert fresh.status == SearchStatus.LOADING

    def test_clear_is_idempotent(self):
        state = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "a"))
        state = reduce_search_state(state, ResolveSuccess("req-1", make_success("one")))

        once = reduce_search_state(state, Clear())
        twice = reduce_search_state(once, Clear())

        assert once == twice == INITIAL_STATE

    def test_second_resolution_for_same_request_replaces_first(self):
        state = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "a"))
        state = reduce_search_state(state, ResolveFailure("req-1", "timeout", ErrorKind.TIMEOUT))
        state = reduce_search_state(state, ResolveSuccess("req-1", make_success("late")))

        assert state.status == SearchStatus.SUCCESS

    def test_is_stale(self):
        loading = reduce_search_state(INITIAL_STATE, StartSearch("req-1", "a"))

        assert not SearchStateReducer.is_stale(loading, "req-1")
        assert SearchStateReducer.is_stale(loading, "req-0")
        assert SearchStateReducer.is_stale(INITIAL_STATE, "req-1")

    def test_unknown_action_is_rejected(self):
        with pytest.raises(TypeError):
            reduce_search_state(INITIAL_STATE, object())


class TestSearchStateStore:
    """Test suite for the state container."""

    def test_starts_idle(self, store):
        assert store.state is INITIAL_STATE
        assert store.state.is_idle

    def test_listeners_see_every_change(self, store):
        seen = []
        store.subscribe(lambda state: seen.append(state.status))

        store.dispatch(StartSearch("req-1", "a"))
        store.dispatch(ResolveSuccess("req-1", make_success("one")))
        store.dispatch(Clear())

        assert seen == [SearchStatus.LOADING, SearchStatus.SUCCESS, SearchStatus.IDLE]

    def test_stale_resolution_notifies_nobody(self, store):
        seen = []
        store.dispatch(StartSearch("req-2", "b"))
        store.subscribe(seen.append)

        result = store.dispatch(ResolveSuccess("req-1", make_success("stale")))

        assert seen == []
        assert result is store.state
        assert store.state.is_loading

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        store.dispatch(StartSearch("req-1", "a"))

        assert seen == []

    def test_failing_listener_does_not_block_others(self, store):
        seen = []

        def broken(state):
            raise RuntimeError("listener bug")

        store.subscribe(broken)
        store.subscribe(seen.append)

        store.dispatch(StartSearch("req-1", "a"))

        assert len(seen) == 1
        assert store.state.is_loading

    def test_listener_dispatching_during_notification(self, store):
        seen = []

        def clear_on_error(state):
            if state.is_error:
                store.dispatch(Clear())

        store.subscribe(clear_on_error)
        store.subscribe(lambda state: seen.append(state.status))

        store.dispatch(StartSearch("req-1", "a"))
        store.dispatch(ResolveFailure("req-1", "boom", ErrorKind.REMOTE))

        assert store.state.is_idle
        assert seen[-1] == SearchStatus.IDLE
        assert SearchStatus.ERROR not in seen[1:]

    def test_stores_are_independent(self):
        first = SearchStateStore()
        second = SearchStateStore()

        first.dispatch(StartSearch("req-1", "a"))

        assert first.state.is_loading
        assert second.state.is_idle


class TestSuccessOutcome:
    """Test suite for the Success outcome."""

    def test_total_defaults_to_result_count(self):
        outcome = make_success("one", "two")
        bare = Success(results=outcome.results)

        assert bare.total_results == 2

    def test_explicit_total_is_kept(self):
        assert Success(results=make_success("one").results, total_results=40).total_results == 40
        assert Success().total_results == 0
