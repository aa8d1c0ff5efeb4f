"""
Environment configuration.

Typed access to the merged configuration, with environment variables
applied on top.
"""

import os
from typing import Any, Dict, Optional

from ...core.entities import LocationContext, SearchType


class EnvironmentConfig:
    """
    Environment-specific configuration.

    This class exposes typed getters over the configuration dictionary,
    applying environment variable overrides once at construction.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the configuration.

        Args:
            config: Merged configuration
        """
        self.config = config
        self._apply_environment_overrides()

    def _apply_environment_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        search_config = self.config.setdefault("search", {})

        endpoint = os.environ.get("SEARCH_ENDPOINT_URL") or os.environ.get("N8N_WEBHOOK_URL")
        if endpoint:
            search_config["endpoint_url"] = endpoint

        if "SEARCH_WEBHOOK_SECRET" in os.environ:
            search_config["webhook_secret"] = os.environ["SEARCH_WEBHOOK_SECRET"]

        if "SEARCH_TIMEOUT_SECONDS" in os.environ:
            try:
                search_config["timeout_seconds"] = float(os.environ["SEARCH_TIMEOUT_SECONDS"])
            except ValueError:
                search_config["timeout_seconds"] = os.environ["SEARCH_TIMEOUT_SECONDS"]

        log_config = self.config.setdefault("logging", {})
        if "LOG_LEVEL" in os.environ:
            log_config["level"] = os.environ["LOG_LEVEL"]
        if isinstance(log_config.get("level"), str):
            log_config["level"] = log_config["level"].upper()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level section."""
        return self.config.get(key, default)

    def get_search_endpoint_url(self) -> Optional[str]:
        """
        Get the remote search endpoint.

        Returns:
            Optional[str]: Endpoint URL, or None when simulation mode applies
        """
        return self.config["search"].get("endpoint_url") or None

    def get_webhook_secret(self) -> Optional[str]:
        return self.config["search"].get("webhook_secret") or None

    def get_search_timeout(self) -> float:
        """
        Get search timeout.

        Returns:
            float: Timeout in seconds
        """
        return float(self.config["search"].get("timeout_seconds", 30.0))

    def get_retry_attempts(self) -> int:
        return int(self.config["search"].get("retry_attempts", 0))

    def get_retry_delay(self) -> float:
        return float(self.config["search"].get("retry_delay_seconds", 1.0))

    def get_default_search_type(self) -> SearchType:
        return SearchType.parse(self.config["search"].get("default_search_type", "all"))

    def get_max_query_length(self) -> int:
        return int(self.config["search"].get("max_query_length", 1000))

    def get_fallback_location(self) -> Optional[LocationContext]:
        """
        Get the place substituted when the real location lookup fails.

        Returns:
            Optional[LocationContext]: Snapshot flagged as a fallback, or
            None when no fallback is configured
        """
        fallback = (self.config.get("location") or {}).get("fallback")
        if not fallback:
            return None
        return LocationContext(
            country=fallback.get("country", ""),
            city=fallback.get("city", ""),
            latitude=fallback.get("latitude"),
            longitude=fallback.get("longitude"),
            is_fallback=True
        )

    def get_results_path(self) -> str:
        return self.config["presentation"].get("results_path", "/search")

    def get_entry_path(self) -> str:
        return self.config["presentation"].get("entry_path", "/")

    def get_items_per_page(self) -> int:
        return int(self.config["presentation"].get("items_per_page", 9))

    def get_log_level(self) -> str:
        """
        Get logging level.

        Returns:
            str: Logging level
        """
        return str(self.config["logging"].get("level", "INFO")).upper()
