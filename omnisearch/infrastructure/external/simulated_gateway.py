"""
Offline stand-in for the remote search endpoint.

Used when no endpoint URL is configured, so the whole flow can be
exercised without a workflow server.
"""

from ...core.entities import ResultItem, SearchOutcome, SearchRequest, Success
from ...core.interfaces import SearchGatewayInterface
from ...shared.logging import get_logger

logger = get_logger(__name__)

SIMULATED_EXECUTION_TIME = 0.1


class SimulatedSearchGateway(SearchGatewayInterface):
    """Answers every request with two canned results."""

    async def submit(self, request: SearchRequest) -> SearchOutcome:
        logger.warning(
            "No search endpoint configured, returning simulated results",
            request_id=request.request_id
        )
        search_type = request.search_type.value
        results = (
            ResultItem(
                id="1",
                title="Simulated result 1",
                description=f"Result for: {request.query}",
                type=search_type,
                category="Simulation",
                tags=("test", "simulation")
            ),
            ResultItem(
                id="2",
                title="Simulated result 2",
                description=f"Another result for: {request.query}",
                type=search_type,
                category="Simulation",
                tags=("test", "simulation")
            )
        )
        return Success(
            results=results,
            total_results=len(results),
            processing_time=SIMULATED_EXECUTION_TIME
        )
