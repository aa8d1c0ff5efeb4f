"""
Search session state and the actions that change it.

SearchSessionState is the single value the UI reads. It only ever changes
through the four actions defined here, applied by the search state reducer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from .outcome_entity import ErrorKind, Success
from .search_entity import ResultItem


class SearchStatus(Enum):
    """Lifecycle of the current search."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SearchSessionState:
    """
    Snapshot of the current search.

    Payload fields are only meaningful for the matching status; readers
    must check ``status`` first.
    """
    status: SearchStatus = SearchStatus.IDLE
    active_request_id: Optional[str] = None
    query: Optional[str] = None
    results: Tuple[ResultItem, ...] = ()
    total_results: int = 0
    processing_time: Optional[float] = None
    suggestions: Tuple[str, ...] = ()
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def is_idle(self) -> bool:
        return self.status == SearchStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status == SearchStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status == SearchStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == SearchStatus.ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary representation."""
        return {
            'status': self.status.value,
            'active_request_id': self.active_request_id,
            'query': self.query,
            'results': [result.to_dict() for result in self.results],
            'total_results': self.total_results,
            'processing_time': self.processing_time,
            'suggestions': list(self.suggestions),
            'error_message': self.error_message,
            'error_kind': self.error_kind.value if self.error_kind else None
        }


INITIAL_STATE = SearchSessionState()


@dataclass(frozen=True)
class StartSearch:
    """Begin a new search; always wins over whatever was there before."""
    request_id: str
    query: str


@dataclass(frozen=True)
class ResolveSuccess:
    """Deliver a successful outcome for a request."""
    request_id: str
    outcome: Success


@dataclass(frozen=True)
class ResolveFailure:
    """Deliver a failure for a request."""
    request_id: str
    error_message: str
    error_kind: Optional[ErrorKind] = None


@dataclass(frozen=True)
class Clear:
    """Return to the initial idle state."""


SearchAction = Union[StartSearch, ResolveSuccess, ResolveFailure, Clear]
