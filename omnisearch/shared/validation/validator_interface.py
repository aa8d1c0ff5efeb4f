"""
Validation result types.

This module defines the values produced by validation, shared by the
request normalizer and the configuration validator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ValidationSeverity(Enum):
    """Validation severity levels."""
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass
class ValidationIssue:
    """A single validation problem."""

    severity: ValidationSeverity
    message: str
    field: Optional[str] = None
    value: Any = None


@dataclass
class ValidationResult:
    """
    Validation result.

    Valid as long as no issue of ERROR severity has been added.
    """

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ) -> None:
        """
        Add validation issue.

        Args:
            severity: Issue severity
            message: Issue message
            field: Optional field name
            value: Optional invalid value
        """
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                field=field,
                value=value
            )
        )

    def error_messages(self) -> List[str]:
        """Messages of all ERROR issues, in the order they were found."""
        return [issue.message for issue in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation
        """
        return {
            "is_valid": self.is_valid,
            "issues": [
                {
                    "severity": issue.severity.value,
                    "message": issue.message,
                    "field": issue.field,
                    "value": issue.value
                }
                for issue in self.issues
            ]
        }
