"""
Search container for one client session.

This module provides a container that owns the configured services of a
session, including logging set-up and graceful shutdown.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from ...application.services.search_orchestrator import SearchOrchestrator
from ...application.state.search_state_store import SearchStateStore
from ...core.interfaces import SearchGatewayInterface
from ...infrastructure.config.config_manager import ConfigManager
from ...infrastructure.external.simulated_gateway import SimulatedSearchGateway
from ...shared.di.container import Container
from ...shared.di.service_config import configure_services
from ...shared.logging import LogLevel, configure_logging, get_logger
from ..cli.formatters.output_formatter import OutputFormatter
from ..views.results_view import ResultsController

logger = get_logger(__name__)


class SearchContainer:
    """
    Container for search operations.

    This class manages the lifecycle of a search session: configuration,
    service wiring and release of network resources.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        environment: Optional[str] = None,
        config_manager: Optional[ConfigManager] = None
    ):
        """
        Initialize the container.

        Args:
            config_dir: Configuration directory, None for built-in defaults
            environment: Optional environment name
            config_manager: Ready configuration, overrides the other arguments
        """
        self.config_manager = config_manager or ConfigManager(
            config_dir=config_dir,
            environment=environment
        )
        self.container = configure_services(Container(), self.config_manager)
        self._started = False

    @property
    def store(self) -> SearchStateStore:
        return self.container.resolve(SearchStateStore)

    @property
    def orchestrator(self) -> SearchOrchestrator:
        return self.container.resolve(SearchOrchestrator)

    @property
    def controller(self) -> ResultsController:
        return self.container.resolve(ResultsController)

    @property
    def formatter(self) -> OutputFormatter:
        return self.container.resolve(OutputFormatter)

    def start(self, log_output: TextIO = sys.stderr) -> None:
        """
        Load configuration and set up logging.

        Args:
            log_output: Stream for JSON log lines

        Raises:
            FileNotFoundError: If base.yaml is missing
            ValueError: If configuration is invalid
        """
        config = self.config_manager.get_config()
        configure_logging(LogLevel.parse(config.get_log_level()), output=log_output)
        self._started = True
        logger.info("Search container started", **self.get_status())

    async def shutdown(self) -> None:
        """Shutdown the container gracefully."""
        await self.container.dispose()
        if self._started:
            logger.info("Search container shut down")
        self._started = False

    async def __aenter__(self) -> "SearchContainer":
        if not self._started:
            self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    def get_status(self) -> Dict[str, Any]:
        """
        Get the session status.

        Returns:
            Dict[str, Any]: Endpoint, simulation mode and current search status
        """
        config = self.config_manager.get_config()
        gateway = self.container.resolve(SearchGatewayInterface)
        state = self.store.state
        return {
            "environment": self.config_manager.environment,
            "endpoint_url": config.get_search_endpoint_url(),
            "simulation_mode": isinstance(gateway, SimulatedSearchGateway),
            "search_status": state.status.value,
            "active_request_id": state.active_request_id,
            "services": self.container.registered_services()
        }
