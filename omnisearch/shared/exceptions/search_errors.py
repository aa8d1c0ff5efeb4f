"""
Exception hierarchy for search failures.

Each exception carries the ErrorKind it maps to, so the orchestrator can
turn any of them into a Failure outcome without inspecting its type.
"""

from typing import Any, Dict, Optional

from ...core.entities import ErrorKind, Failure


class SearchError(Exception):
    """Base class for all search errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def to_failure(self) -> Failure:
        """
        Convert the error to a Failure outcome.

        Returns:
            Failure: Outcome carrying this error's kind, message and details
        """
        return Failure(
            error_kind=self.kind,
            message=self.message,
            details=dict(self.details)
        )


class SearchValidationError(SearchError):
    """Raw input was empty or invalid; nothing is submitted."""

    kind = ErrorKind.VALIDATION


class ImageEncodingError(SearchError):
    """An image could not be read or encoded."""

    kind = ErrorKind.ENCODING


class RemoteSearchError(SearchError):
    """The search endpoint answered with an error or an unusable body."""

    kind = ErrorKind.REMOTE

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        **details: Any
    ):
        super().__init__(message, status_code=status_code, body=body, **details)
        self.status_code = status_code
        self.body = body


class SearchTransportError(SearchError):
    """The search endpoint could not be reached."""

    kind = ErrorKind.TRANSPORT
