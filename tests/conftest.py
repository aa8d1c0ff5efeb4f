"""
Test configuration and fixtures for the search client tests.
"""

import asyncio
from typing import List, Tuple

import pytest

from omnisearch.application.services.search_orchestrator import SearchOrchestrator
from omnisearch.application.state.search_state_store import SearchStateStore
from omnisearch.core.entities import (
    ErrorKind,
    Failure,
    LocationContext,
    ResultItem,
    SearchOutcome,
    SearchRequest,
    Success
)
from omnisearch.core.interfaces import ImageEncoderInterface, SearchGatewayInterface
from omnisearch.domain.search import RequestNormalizer
from omnisearch.infrastructure.providers import CachedLocationProvider, SessionIdentityProvider
from omnisearch.presentation.navigation import HistoryNavigator

FAKE_IMAGE_PAYLOAD = "data:image/png;base64,iVBORw0KGgo="

_ENVIRONMENT_VARIABLES = (
    "SEARCH_ENDPOINT_URL",
    "N8N_WEBHOOK_URL",
    "SEARCH_WEBHOOK_SECRET",
    "SEARCH_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "APP_ENV",
    "OMNISEARCH_CONFIG_DIR",
)


class FakeImageEncoder(ImageEncoderInterface):
    """Encoder that never touches the filesystem."""

    def __init__(self):
        self.sources = []

    async def encode(self, source):
        self.sources.append(source)
        return FAKE_IMAGE_PAYLOAD


class ControlledGateway(SearchGatewayInterface):
    """
    Gateway whose answers are released by the test.

    Every submit parks on a future; ``resolve`` completes the call for a
    given query, in whatever order the test chooses.
    """

    def __init__(self):
        self.calls: List[Tuple[SearchRequest, asyncio.Future]] = []

    async def submit(self, request: SearchRequest) -> SearchOutcome:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((request, future))
        return await future

    def request_for(self, query: str) -> SearchRequest:
        return next(request for request, _ in self.calls if request.query == query)

    def resolve(self, query: str, outcome: SearchOutcome) -> None:
        future = next(future for request, future in self.calls if request.query == query)
        future.set_result(outcome)


class ScriptedGateway(SearchGatewayInterface):
    """Gateway answering with a fixed sequence of outcomes."""

    def __init__(self, *outcomes: SearchOutcome):
        self.outcomes = list(outcomes)
        self.requests: List[SearchRequest] = []

    async def submit(self, request: SearchRequest) -> SearchOutcome:
        self.requests.append(request)
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


def make_success(*titles: str) -> Success:
    """Success outcome with one result per title."""
    results = tuple(
        ResultItem(id=str(index), title=title)
        for index, title in enumerate(titles, start=1)
    )
    return Success(results=results, total_results=len(results), processing_time=0.25)


def make_failure(kind: ErrorKind = ErrorKind.REMOTE, message: str = "Search service returned HTTP 500") -> Failure:
    return Failure(error_kind=kind, message=message)


async def wait_for_calls(gateway: ControlledGateway, count: int) -> None:
    """Let pending tasks run until the gateway has seen ``count`` calls."""
    for _ in range(100):
        if len(gateway.calls) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"Gateway saw {len(gateway.calls)} calls, expected {count}")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's shell settings out of the tests."""
    for name in _ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store() -> SearchStateStore:
    return SearchStateStore()


@pytest.fixture
def navigator() -> HistoryNavigator:
    return HistoryNavigator()


@pytest.fixture
def identity_provider() -> SessionIdentityProvider:
    return SessionIdentityProvider()


@pytest.fixture
def paris() -> LocationContext:
    return LocationContext(
        country="France",
        city="Paris",
        latitude=48.8566,
        longitude=2.3522
    )


@pytest.fixture
def location_provider(paris) -> CachedLocationProvider:
    return CachedLocationProvider(initial=paris)


@pytest.fixture
def image_encoder() -> FakeImageEncoder:
    return FakeImageEncoder()


@pytest.fixture
def normalizer(image_encoder) -> RequestNormalizer:
    return RequestNormalizer(image_encoder)


@pytest.fixture
def make_orchestrator(store, normalizer, identity_provider, location_provider, navigator):
    """Factory for orchestrators sharing the test's store and collaborators."""

    def factory(gateway: SearchGatewayInterface, **kwargs) -> SearchOrchestrator:
        options = {
            "store": store,
            "normalizer": normalizer,
            "gateway": gateway,
            "identity_provider": identity_provider,
            "location_provider": location_provider,
            "navigator": navigator,
        }
        options.update(kwargs)
        return SearchOrchestrator(**options)

    return factory
