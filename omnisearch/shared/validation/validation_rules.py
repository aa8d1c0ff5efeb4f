"""
Validation rules.

Small reusable predicates, each paired with the message reported when
the value fails it.
"""

import math
import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Union

from .validator_interface import ValidationSeverity


class ValidationRule(ABC):
    """
    Base class for validation rules.

    A rule checks one value; the engine decides which value it sees.
    """

    def __init__(
        self,
        message: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR
    ):
        """
        Initialize validation rule.

        Args:
            message: Error message
            severity: Rule severity
        """
        self.message = message
        self.severity = severity

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """
        Validate value.

        Args:
            value: Value to validate

        Returns:
            bool: Whether value is valid
        """
        pass


class NotBlankRule(ValidationRule):
    """Rule that requires a string with visible content."""

    def validate(self, value: Any) -> bool:
        return isinstance(value, str) and bool(value.strip())


class MaxLengthRule(ValidationRule):
    """Rule that caps the stripped length of a string."""

    def __init__(
        self,
        message: str,
        max_length: int,
        severity: ValidationSeverity = ValidationSeverity.ERROR
    ):
        super().__init__(message, severity)
        self.max_length = max_length

    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        return len(str(value).strip()) <= self.max_length


class NumberRule(ValidationRule):
    """Rule that requires a finite number, optionally within bounds."""

    def __init__(
        self,
        message: str,
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None,
        integer: bool = False,
        severity: ValidationSeverity = ValidationSeverity.ERROR
    ):
        super().__init__(message, severity)
        self.min_value = min_value
        self.max_value = max_value
        self.integer = integer

    def validate(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if self.integer and not isinstance(value, int):
            return False
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            return False
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        return True


class ChoiceRule(ValidationRule):
    """Rule that restricts a value to a fixed set."""

    def __init__(
        self,
        message: str,
        choices: Iterable[Any],
        severity: ValidationSeverity = ValidationSeverity.ERROR
    ):
        super().__init__(message, severity)
        self.choices = set(choices)

    def validate(self, value: Any) -> bool:
        return value in self.choices


class PatternRule(ValidationRule):
    """Rule that requires a string matching a regular expression."""

    def __init__(
        self,
        message: str,
        pattern: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR
    ):
        super().__init__(message, severity)
        self.pattern = re.compile(pattern)

    def validate(self, value: Any) -> bool:
        return isinstance(value, str) and bool(self.pattern.match(value))


class OptionalRule(ValidationRule):
    """Wraps a rule so that a missing value passes."""

    def __init__(self, rule: ValidationRule):
        super().__init__(rule.message, rule.severity)
        self.rule = rule

    def validate(self, value: Any) -> bool:
        return value is None or self.rule.validate(value)
