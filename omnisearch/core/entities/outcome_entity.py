"""
Outcome models for asynchronous searches.

A search outcome is exactly one of Pending, Success or Failure. The gateway
produces Success or Failure; Pending only describes a request that has been
started and not yet resolved.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from .search_entity import ResultItem


class ErrorKind(Enum):
    """Classification of search failures."""
    VALIDATION = "validation"
    ENCODING = "encoding"
    REMOTE = "remote"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Pending:
    """A search that has started and not resolved yet."""
    request_id: str


@dataclass(frozen=True)
class Success:
    """
    A successful remote answer.

    total_results defaults to the number of results carried. processing_time
    stays None when the service did not report one; zero is a real
    measurement and is kept as such.
    """
    results: Tuple[ResultItem, ...] = ()
    total_results: Optional[int] = None
    processing_time: Optional[float] = None
    suggestions: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.total_results is None:
            object.__setattr__(self, 'total_results', len(self.results))

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to dictionary representation."""
        return {
            'results': [result.to_dict() for result in self.results],
            'total_results': self.total_results,
            'processing_time': self.processing_time,
            'suggestions': list(self.suggestions)
        }


@dataclass(frozen=True)
class Failure:
    """A failed search, with diagnostics kept out of the user message."""
    error_kind: ErrorKind
    message: str
    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to dictionary representation."""
        return {
            'error_kind': self.error_kind.value,
            'message': self.message,
            'details': self.details
        }


SearchOutcome = Union[Pending, Success, Failure]
