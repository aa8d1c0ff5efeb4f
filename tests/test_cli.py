"""
Tests for the composition root, the session container and the CLI.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from omnisearch.application.services import SearchOrchestrator
from omnisearch.application.state import SearchStateStore
from omnisearch.core.interfaces import SearchGatewayInterface
from omnisearch.infrastructure.config import ConfigManager
from omnisearch.infrastructure.external import RemoteSearchGateway, SimulatedSearchGateway
from omnisearch.presentation.cli.main import cli
from omnisearch.presentation.containers.search_container import SearchContainer
from omnisearch.shared.di import Container
from omnisearch.shared.di.service_config import configure_services


@pytest.fixture
def runner():
    """CLI runner with a console wide enough to keep table rows on one line."""
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def config_dir(tmp_path):
    """Configuration directory with quiet logging."""
    (tmp_path / "base.yaml").write_text(yaml.safe_dump({"logging": {"level": "ERROR"}}))
    return tmp_path


class TestServiceConfiguration:
    """Test suite for the composition root."""

    def test_simulation_gateway_without_endpoint(self):
        container = configure_services(Container(), ConfigManager(config_dir=None))

        assert isinstance(container.resolve(SearchGatewayInterface), SimulatedSearchGateway)

    def test_remote_gateway_with_endpoint(self):
        manager = ConfigManager.from_dict({
            "search": {"endpoint_url": "https://hooks.example.com/search", "webhook_secret": "s3cret"}
        })
        container = configure_services(Container(), manager)

        gateway = container.resolve(SearchGatewayInterface)

        assert isinstance(gateway, RemoteSearchGateway)
        assert gateway.webhook_secret == "s3cret"

    def test_orchestrators_share_the_container_store(self):
        container = configure_services(Container(), ConfigManager(config_dir=None))

        first = container.resolve(SearchOrchestrator)
        second = container.resolve(SearchOrchestrator)

        assert first is not second
        assert first.store is second.store is container.resolve(SearchStateStore)

    def test_containers_do_not_share_stores(self):
        first = configure_services(Container(), ConfigManager(config_dir=None))
        second = configure_services(Container(), ConfigManager(config_dir=None))

        assert first.resolve(SearchStateStore) is not second.resolve(SearchStateStore)

    def test_orchestrator_uses_configured_policy(self):
        manager = ConfigManager.from_dict({
            "search": {"timeout_seconds": 3, "retry_attempts": 2, "default_search_type": "product"}
        })
        orchestrator = configure_services(Container(), manager).resolve(SearchOrchestrator)

        assert orchestrator.timeout_seconds == 3.0
        assert orchestrator.retry_attempts == 2
        assert orchestrator.default_search_type.value == "product"


@pytest.mark.asyncio
class TestSearchContainer:
    """Test suite for the session container."""

    async def test_search_in_simulation_mode(self, config_dir):
        async with SearchContainer(config_dir=config_dir) as session:
            await session.orchestrator.handle_text_search("phone repair")

            state = session.store.state
            assert state.is_success
            assert state.total_results == 2
            assert session.get_status()["simulation_mode"] is True

    async def test_shutdown_closes_gateway(self):
        manager = ConfigManager.from_dict({
            "search": {"endpoint_url": "https://hooks.example.com/search"},
            "logging": {"level": "ERROR"},
        })
        session = SearchContainer(config_manager=manager)
        session.start()
        gateway = session.container.resolve(SearchGatewayInterface)
        client = gateway._get_client()

        await session.shutdown()

        assert client.is_closed


class TestCli:
    """Test suite for the command line."""

    def test_text_search_table(self, runner, config_dir):
        result = runner.invoke(cli, ["--config-dir", str(config_dir), "text", "phone repair"])

        assert result.exit_code == 0, result.output
        assert "Simulated result 1" in result.output
        assert "2 results" in result.output

    def test_text_search_json(self, runner, config_dir):
        result = runner.invoke(
            cli,
            ["--config-dir", str(config_dir), "text", "phone repair", "--type", "service", "--json"]
        )

        assert result.exit_code == 0, result.output
        state = json.loads(result.stdout)
        assert state["status"] == "success"
        assert state["query"] == "phone repair"
        assert state["total_results"] == 2
        assert state["results"][0]["type"] == "service"

    def test_voice_search(self, runner, config_dir):
        result = runner.invoke(cli, ["--config-dir", str(config_dir), "voice", "plumber", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["query"] == "plumber"

    def test_image_search(self, runner, config_dir, tmp_path):
        image = tmp_path / "shoe.png"
        image.write_bytes(b"\x89PNG")

        result = runner.invoke(cli, ["--config-dir", str(config_dir), "image", str(image), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["query"] == "Image search: shoe.png"

    def test_unreadable_image_exits_with_error(self, runner, config_dir, tmp_path):
        result = runner.invoke(
            cli,
            ["--config-dir", str(config_dir), "image", str(tmp_path / "missing.png")]
        )

        assert result.exit_code == 1
        assert "missing.png" in result.output

    def test_blank_query_exits_with_error(self, runner, config_dir):
        result = runner.invoke(cli, ["--config-dir", str(config_dir), "text", "   "])

        assert result.exit_code == 1
        assert "Invalid search input" in result.output

    def test_invalid_configuration(self, runner, tmp_path):
        (tmp_path / "base.yaml").write_text(yaml.safe_dump({"search": {"timeout_seconds": -1}}))

        result = runner.invoke(cli, ["--config-dir", str(tmp_path), "text", "q"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_invalid_search_type(self, runner, config_dir):
        result = runner.invoke(cli, ["--config-dir", str(config_dir), "text", "q", "--type", "furniture"])

        assert result.exit_code == 2
