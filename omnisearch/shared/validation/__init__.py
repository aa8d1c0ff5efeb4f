"""Rule-based validation."""

from .validator_interface import ValidationIssue, ValidationResult, ValidationSeverity
from .validation_rules import (
    ValidationRule,
    NotBlankRule,
    MaxLengthRule,
    NumberRule,
    ChoiceRule,
    PatternRule,
    OptionalRule
)
from .validation_engine import ValidationEngine

__all__ = [
    'ValidationIssue',
    'ValidationResult',
    'ValidationSeverity',
    'ValidationRule',
    'NotBlankRule',
    'MaxLengthRule',
    'NumberRule',
    'ChoiceRule',
    'PatternRule',
    'OptionalRule',
    'ValidationEngine'
]
