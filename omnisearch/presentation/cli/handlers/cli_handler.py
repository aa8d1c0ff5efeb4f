"""
Base class and result type for CLI commands.

A command ends either with a final search state or with a rejection
before any search started; both map onto a process exit code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ....core.entities import SearchSessionState
from ...cli.formatters.output_formatter import OutputFormatter


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    message: str
    request_id: Optional[str] = None
    state: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    @classmethod
    def from_state(cls, state: SearchSessionState) -> "CommandResult":
        """
        Summarise a finished search.

        Args:
            state: Store state after the search resolved

        Returns:
            CommandResult: Failed when the search ended in the error state
        """
        if state.is_error:
            return cls(
                success=False,
                message=state.error_message or "Search failed",
                request_id=state.active_request_id,
                state=state.to_dict()
            )
        return cls(
            success=True,
            message="Search completed successfully",
            request_id=state.active_request_id,
            state=state.to_dict()
        )


class CommandHandler(ABC):
    """Base class for command handlers printing through one formatter."""

    def __init__(self, formatter: OutputFormatter):
        self.formatter = formatter

    @abstractmethod
    async def execute(self, **kwargs) -> CommandResult:
        """
        Execute the command.

        Args:
            **kwargs: Command arguments

        Returns:
            CommandResult: Command execution result
        """

    def reject(self, message: str, reason: Optional[str] = None) -> CommandResult:
        """
        Report input that never became a search.

        Args:
            message: Headline for the error panel
            reason: Optional explanation shown below it

        Returns:
            CommandResult: Failed result with no search state
        """
        self.formatter.print(self.formatter.format_error(message, reason))
        return CommandResult(success=False, message=message)
