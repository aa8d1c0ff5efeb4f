"""
Service configuration for dependency injection.

This module is the composition root: it registers every search component
in a container, built from one configuration manager.
"""

from ...application.services.search_orchestrator import SearchOrchestrator
from ...application.state.search_state_store import SearchStateStore
from ...core.interfaces import (
    IdentityProviderInterface,
    ImageEncoderInterface,
    LocationProviderInterface,
    NavigatorInterface,
    SearchGatewayInterface
)
from ...domain.search.request_normalizer import RequestNormalizer
from ...infrastructure.config.config_manager import ConfigManager
from ...infrastructure.config.environment_config import EnvironmentConfig
from ...infrastructure.external.image_encoder import DataUrlImageEncoder
from ...infrastructure.external.search_gateway import RemoteSearchGateway
from ...infrastructure.external.simulated_gateway import SimulatedSearchGateway
from ...infrastructure.providers.identity_provider import SessionIdentityProvider
from ...infrastructure.providers.location_provider import CachedLocationProvider
from ...presentation.cli.formatters.output_formatter import OutputFormatter
from ...presentation.navigation.history_navigator import HistoryNavigator
from ...presentation.views.results_view import ResultsController
from .container import Container


def _create_gateway(config: EnvironmentConfig) -> SearchGatewayInterface:
    endpoint_url = config.get_search_endpoint_url()
    if not endpoint_url:
        return SimulatedSearchGateway()
    return RemoteSearchGateway(
        endpoint_url=endpoint_url,
        webhook_secret=config.get_webhook_secret(),
        transport_timeout=config.get_search_timeout()
    )


def configure_services(
    container: Container,
    config_manager: ConfigManager
) -> Container:
    """
    Configure services in the dependency injection container.

    The store, gateway and providers are singletons of the container, so
    one container is one client session.

    Args:
        container: Container to configure
        config_manager: Source of all settings

    Returns:
        Container: The configured container
    """
    container.register_instance(ConfigManager, config_manager)
    container.register_singleton(EnvironmentConfig, lambda: config_manager.get_config())

    def config() -> EnvironmentConfig:
        return container.resolve(EnvironmentConfig)

    # State
    container.register_singleton(SearchStateStore, SearchStateStore)

    # Infrastructure
    container.register_singleton(ImageEncoderInterface, DataUrlImageEncoder)
    container.register_singleton(SearchGatewayInterface, lambda: _create_gateway(config()))
    container.register_singleton(IdentityProviderInterface, SessionIdentityProvider)
    container.register_singleton(
        LocationProviderInterface,
        lambda: CachedLocationProvider(fallback=config().get_fallback_location())
    )
    container.register_singleton(NavigatorInterface, HistoryNavigator)

    # Domain and application services
    container.register_singleton(
        RequestNormalizer,
        lambda: RequestNormalizer(
            image_encoder=container.resolve(ImageEncoderInterface),
            max_query_length=config().get_max_query_length()
        )
    )
    container.register_transient(
        SearchOrchestrator,
        lambda: SearchOrchestrator(
            store=container.resolve(SearchStateStore),
            normalizer=container.resolve(RequestNormalizer),
            gateway=container.resolve(SearchGatewayInterface),
            identity_provider=container.resolve(IdentityProviderInterface),
            location_provider=container.resolve(LocationProviderInterface),
            navigator=container.resolve(NavigatorInterface),
            results_path=config().get_results_path(),
            timeout_seconds=config().get_search_timeout(),
            retry_attempts=config().get_retry_attempts(),
            retry_delay_seconds=config().get_retry_delay(),
            default_search_type=config().get_default_search_type()
        )
    )

    # Presentation
    container.register_transient(
        ResultsController,
        lambda: ResultsController(
            store=container.resolve(SearchStateStore),
            navigator=container.resolve(NavigatorInterface),
            entry_path=config().get_entry_path(),
            items_per_page=config().get_items_per_page()
        )
    )
    container.register_singleton(OutputFormatter, OutputFormatter)

    return container
