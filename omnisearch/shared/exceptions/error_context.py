"""
Error context for unexpected failures.

An unexpected exception inside a search is turned into one record that
names the search it broke and is attached to the resulting failure.
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ErrorContext:
    """
    What failed, for which search.

    ``to_details`` is safe to show in a failure outcome; the stack trace
    is only emitted through ``to_log_fields``.
    """

    error_type: str
    error_message: str
    request_id: Optional[str] = None
    stack_trace: Tuple[str, ...] = ()
    occurred_at: datetime = field(default_factory=_now)

    @classmethod
    def from_exception(
        cls,
        error: BaseException,
        request_id: Optional[str] = None,
        include_stack_trace: bool = True
    ) -> "ErrorContext":
        """
        Capture an exception.

        Args:
            error: The exception raised during the search
            request_id: Search the exception belongs to
            include_stack_trace: Whether to keep the formatted traceback

        Returns:
            ErrorContext: Captured context
        """
        stack_trace: Tuple[str, ...] = ()
        if include_stack_trace:
            stack_trace = tuple(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        return cls(
            error_type=type(error).__name__,
            error_message=str(error),
            request_id=request_id,
            stack_trace=stack_trace
        )

    def to_details(self) -> Dict[str, Any]:
        return {
            "error_type": self.error_type,
            "error_message": self.error_message,
            "request_id": self.request_id,
            "occurred_at": self.occurred_at.isoformat()
        }

    def to_log_fields(self) -> Dict[str, Any]:
        fields = self.to_details()
        fields["stack_trace"] = list(self.stack_trace)
        return fields

    def summary(self) -> str:
        """One-line description, e.g. ``RuntimeError in search abc: boom``."""
        where = f" in search {self.request_id}" if self.request_id else ""
        message = f": {self.error_message}" if self.error_message else ""
        return f"{self.error_type}{where}{message}"
