"""
HTTP gateway to the remote search endpoint.

The endpoint is a workflow webhook that accepts the serialized request
as a JSON POST and answers with the result body.
"""

import json
from typing import Any, Dict, Optional

import httpx

from ...core.entities import SearchOutcome, SearchRequest
from ...core.interfaces import SearchGatewayInterface
from ...domain.search import serialize_request
from ...shared.exceptions import RemoteSearchError, SearchError, SearchTransportError
from ...shared.logging import get_logger
from .response_parser import parse_search_response

logger = get_logger(__name__)

MAX_LOGGED_BODY = 500


class RemoteSearchGateway(SearchGatewayInterface):
    """
    Gateway posting search requests to a webhook with httpx.

    The gateway does not time out requests itself beyond the transport
    timeout of the client; the orchestrator bounds each call.
    """

    def __init__(
        self,
        endpoint_url: str,
        webhook_secret: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport_timeout: Optional[float] = None
    ):
        """
        Initialize the gateway.

        Args:
            endpoint_url: Webhook URL
            webhook_secret: Sent as ``X-Webhook-Secret`` when set
            client: Client to use; the gateway creates and owns one if omitted
            transport_timeout: Socket timeout for an owned client
        """
        self.endpoint_url = endpoint_url
        self.webhook_secret = webhook_secret
        self.transport_timeout = transport_timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.transport_timeout)
        return self._client

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json"
        }
        if self.webhook_secret:
            headers["X-Webhook-Secret"] = self.webhook_secret
        return headers

    async def submit(self, request: SearchRequest) -> SearchOutcome:
        """
        Send one request and map the answer.

        Args:
            request: Canonical search request

        Returns:
            SearchOutcome: Success, or Failure with kind REMOTE or TRANSPORT
        """
        payload = serialize_request(request)
        try:
            response = await self._post(payload)
            outcome = self._parse_response(response)
        except SearchError as e:
            logger.warning(
                "Search request failed",
                request_id=request.request_id,
                error_kind=e.kind.value,
                error=e.message
            )
            return e.to_failure()

        logger.info(
            "Search response received",
            request_id=request.request_id,
            total_results=outcome.total_results,
            processing_time=outcome.processing_time
        )
        return outcome

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        try:
            return await self._get_client().post(
                self.endpoint_url,
                json=payload,
                headers=self._headers()
            )
        except httpx.RequestError as e:
            raise SearchTransportError(
                f"Could not reach search service: {e}",
                error_type=type(e).__name__
            ) from e

    def _parse_response(self, response: httpx.Response) -> SearchOutcome:
        body_text = response.text

        if not response.is_success:
            body = self._decode(body_text, strict=False)
            default = f"Search service returned HTTP {response.status_code}"
            message = default
            if isinstance(body, dict):
                detail = next(
                    (body[key] for key in ("error", "details", "message")
                     if isinstance(body.get(key), str) and body[key].strip()),
                    None
                )
                if detail:
                    message = f"{default}: {detail}"
            raise RemoteSearchError(
                message,
                status_code=response.status_code,
                body=body_text[:MAX_LOGGED_BODY]
            )

        return parse_search_response(self._decode(body_text, strict=True))

    @staticmethod
    def _decode(text: str, strict: bool) -> Any:
        try:
            return json.loads(text)
        except ValueError as e:
            if strict:
                raise RemoteSearchError(
                    "Search service returned a body that is not JSON",
                    body=text[:MAX_LOGGED_BODY]
                ) from e
            return None

    async def aclose(self) -> None:
        """Close the HTTP client if the gateway created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
