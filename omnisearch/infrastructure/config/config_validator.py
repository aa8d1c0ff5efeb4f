"""
Configuration validator.

Checks every section at once and reports all problems together.
"""

from typing import Any, Dict, List

from ...core.entities import SearchType
from ...shared.validation import (
    ChoiceRule,
    NumberRule,
    OptionalRule,
    PatternRule,
    ValidationEngine
)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidator:
    """
    Validator for configuration values.

    This class validates configuration values to ensure they meet
    the required format and constraints.
    """

    def __init__(self):
        """Initialize the validator."""
        self.errors: List[str] = []
        self.engine = (
            ValidationEngine()
            .add_rule(
                "search.timeout_seconds",
                NumberRule("Search timeout must be a positive number", min_value=0.001)
            )
            .add_rule(
                "search.retry_attempts",
                NumberRule("Search retry attempts must be a non-negative integer", min_value=0, integer=True)
            )
            .add_rule(
                "search.retry_delay_seconds",
                NumberRule("Search retry delay must be a non-negative number", min_value=0)
            )
            .add_rule(
                "search.max_query_length",
                NumberRule("Search max query length must be a positive integer", min_value=1, integer=True)
            )
            .add_rule(
                "search.default_search_type",
                ChoiceRule(
                    f"Search default type must be one of: {', '.join(t.value for t in SearchType)}",
                    [t.value for t in SearchType]
                )
            )
            .add_rule(
                "presentation.items_per_page",
                NumberRule("Presentation items per page must be a positive integer", min_value=1, integer=True)
            )
            .add_rule(
                "logging.level",
                ChoiceRule(f"Logging level must be one of: {', '.join(_LOG_LEVELS)}", _LOG_LEVELS)
            )
            .add_rule(
                "location.fallback.latitude",
                OptionalRule(NumberRule("Fallback latitude must be between -90 and 90", -90, 90))
            )
            .add_rule(
                "location.fallback.longitude",
                OptionalRule(NumberRule("Fallback longitude must be between -180 and 180", -180, 180))
            )
        )

    def validate_config(self, config: Dict[str, Any]) -> None:
        """
        Validate configuration.

        Args:
            config: Configuration to validate

        Raises:
            ValueError: If configuration is invalid
        """
        result = self.engine.validate(config)
        self.errors = result.error_messages()

        endpoint = config.get("search", {}).get("endpoint_url")
        if endpoint and not PatternRule("", r"^https?://").validate(endpoint):
            self.errors.append("Search endpoint URL must start with http:// or https://")

        if self.errors:
            raise ValueError("\n".join(self.errors))
