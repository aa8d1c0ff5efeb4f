"""
Application service coordinating a search from user action to result.

For every search the orchestrator:

1. derives the display query (synthesized for images),
2. allocates the request id and puts the store in the loading state,
3. navigates to the results view,
4. resolves location and identity, builds the request and calls the gateway,
5. resolves the store with the outcome, tagged with the id from step 2.

Steps 1-3 run before the first suspension point. Nothing raised in steps
4-5 escapes: every error becomes a failure in the store, otherwise the
store would stay in the loading state forever. Cancellation also resolves
the store before it propagates.
"""

import asyncio
from typing import Optional, Union

from ...core.entities import (
    Clear,
    ErrorKind,
    Failure,
    InputType,
    LocationContext,
    ResolveFailure,
    ResolveSuccess,
    SearchOutcome,
    SearchRequest,
    SearchType,
    StartSearch,
    Success
)
from ...core.interfaces import (
    IdentityProviderInterface,
    ImageSource,
    LocationProviderInterface,
    NavigatorInterface,
    SearchGatewayInterface,
    VoiceTranscriberInterface
)
from ...domain.search import (
    RequestNormalizer,
    SearchStateReducer,
    build_results_address
)
from ...shared.exceptions import (
    ErrorContext,
    SearchError,
    SearchValidationError
)
from ...shared.logging import get_logger
from ..state import SearchStateStore

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during search"
CANCELLED_MESSAGE = "The search was cancelled before it finished"


class SearchOrchestrator:
    """
    Drives searches for all three input modalities.

    Overlapping searches are allowed. Only the most recently started one
    can reach the store; answers for older ones are discarded there.
    """

    def __init__(
        self,
        store: SearchStateStore,
        normalizer: RequestNormalizer,
        gateway: SearchGatewayInterface,
        identity_provider: IdentityProviderInterface,
        location_provider: LocationProviderInterface,
        navigator: NavigatorInterface,
        results_path: str = "/search",
        timeout_seconds: Optional[float] = 30.0,
        retry_attempts: int = 0,
        retry_delay_seconds: float = 1.0,
        default_search_type: SearchType = SearchType.ALL
    ):
        """
        Initialize the orchestrator.

        Args:
            store: Search state store shared with the results view
            normalizer: Builds canonical requests
            gateway: Remote search gateway
            identity_provider: Source of the current user id
            location_provider: Source of the cached location
            navigator: Moves the UI to the results view
            results_path: Path of the results view
            timeout_seconds: Limit for one gateway call, None for no limit
            retry_attempts: Re-submissions after transport failures
            retry_delay_seconds: Base delay, doubled after each retry
            default_search_type: Filter used when none is given
        """
        self.store = store
        self.normalizer = normalizer
        self.gateway = gateway
        self.identity_provider = identity_provider
        self.location_provider = location_provider
        self.navigator = navigator
        self.results_path = results_path
        self.timeout_seconds = timeout_seconds
        self.retry_attempts = retry_attempts
        self.retry_delay_seconds = retry_delay_seconds
        self.default_search_type = default_search_type

    async def handle_text_search(
        self,
        text: str,
        search_type: Optional[Union[SearchType, str]] = None
    ) -> Optional[str]:
        """
        Search for typed text.

        Returns:
            Optional[str]: Request id, or None if the text was rejected
        """
        return await self.execute_search(text, InputType.TEXT, search_type)

    async def handle_voice_search(
        self,
        transcript: str,
        search_type: Optional[Union[SearchType, str]] = None
    ) -> Optional[str]:
        """
        Search for a finished voice transcript.

        Returns:
            Optional[str]: Request id, or None if the transcript was rejected
        """
        return await self.execute_search(transcript, InputType.VOICE, search_type)

    async def handle_voice_recording(
        self,
        transcriber: VoiceTranscriberInterface,
        search_type: Optional[Union[SearchType, str]] = None
    ) -> Optional[str]:
        """
        Capture speech, then search for the transcript.

        A failed capture starts no search.

        Returns:
            Optional[str]: Request id, or None if nothing was searched
        """
        try:
            transcript = await transcriber.transcribe()
        except Exception as e:
            logger.warning("Voice capture failed", error=str(e), error_type=type(e).__name__)
            return None
        return await self.handle_voice_search(transcript, search_type)

    async def handle_image_search(
        self,
        image: Optional[ImageSource],
        search_type: Optional[Union[SearchType, str]] = None
    ) -> Optional[str]:
        """
        Search for an image file or upload.

        Returns:
            Optional[str]: Request id, or None if no image was given
        """
        return await self.execute_search("", InputType.IMAGE, search_type, image=image)

    def clear(self) -> None:
        """Reset the store to idle; late answers for the cleared search are dropped."""
        self.store.dispatch(Clear())

    async def execute_search(
        self,
        raw_input: Optional[str],
        input_type: InputType,
        search_type: Optional[Union[SearchType, str]] = None,
        image: Optional[ImageSource] = None
    ) -> Optional[str]:
        """
        Run one search through its whole lifecycle.

        Args:
            raw_input: Text or transcript; ignored for image input
            input_type: Provenance of the query
            search_type: Result-category filter
            image: Image for image input

        Returns:
            Optional[str]: Request id, or None if validation rejected the input
        """
        try:
            search_type = (
                SearchType.parse(search_type) if search_type is not None
                else self.default_search_type
            )
            display_query = self._display_query(raw_input, input_type, image)
        except (SearchValidationError, ValueError) as e:
            logger.info("Search input rejected", input_type=input_type.value, reason=str(e))
            return None

        request_id = self.normalizer.new_request_id()
        self.store.dispatch(StartSearch(request_id=request_id, query=display_query))
        logger.info(
            "Search started",
            request_id=request_id,
            input_type=input_type.value,
            search_type=search_type.value
        )

        try:
            self._navigate(display_query, request_id)
            outcome = await self._resolve(raw_input, input_type, search_type, image, request_id)
        except asyncio.CancelledError:
            logger.info("Search cancelled", request_id=request_id)
            self._dispatch_outcome(
                request_id,
                Failure(error_kind=ErrorKind.INTERNAL, message=CANCELLED_MESSAGE)
            )
            raise
        except Exception as e:
            outcome = self._unexpected_failure(e, request_id)

        self._dispatch_outcome(request_id, outcome)
        return request_id

    def _display_query(
        self,
        raw_input: Optional[str],
        input_type: InputType,
        image: Optional[ImageSource]
    ) -> str:
        if input_type == InputType.IMAGE:
            if image is None:
                raise SearchValidationError("Image search requires an image file", field="image")
            return self.normalizer.image_display_query(image)
        return self.normalizer.normalize_query(raw_input)

    def _navigate(self, query: str, request_id: str) -> None:
        address = build_results_address(query, request_id, self.results_path)
        self.navigator.navigate(address)
        logger.debug("Navigated to results view", address=address, request_id=request_id)

    async def _resolve(
        self,
        raw_input: Optional[str],
        input_type: InputType,
        search_type: SearchType,
        image: Optional[ImageSource],
        request_id: str
    ) -> SearchOutcome:
        try:
            location = self._location_snapshot()
            user_id = await self._current_user_id()
            request = await self.normalizer.build_request(
                raw_input,
                input_type,
                location_snapshot=location,
                user_id=user_id,
                search_type=search_type,
                image=image,
                request_id=request_id
            )
            return await self._submit_with_retry(request)
        except SearchError as e:
            logger.warning(
                "Search failed before reaching the endpoint",
                request_id=request_id,
                error_kind=e.kind.value,
                error=e.message
            )
            return e.to_failure()

    def _location_snapshot(self) -> Optional[LocationContext]:
        try:
            return self.location_provider.get_last_known_location()
        except Exception as e:
            logger.warning("Location lookup failed, searching without location", error=str(e))
            return None

    async def _current_user_id(self) -> Optional[str]:
        try:
            return await self.identity_provider.get_current_user_id()
        except Exception as e:
            logger.warning("Identity lookup failed, searching anonymously", error=str(e))
            return None

    async def _submit_with_retry(self, request: SearchRequest) -> SearchOutcome:
        attempt = 0
        while True:
            outcome = await self._submit_with_timeout(request)

            if not (isinstance(outcome, Failure) and outcome.error_kind == ErrorKind.TRANSPORT):
                return outcome
            if attempt >= self.retry_attempts:
                return outcome
            if SearchStateReducer.is_stale(self.store.state, request.request_id):
                return outcome

            delay = self.retry_delay_seconds * (2 ** attempt)
            attempt += 1
            logger.info(
                "Retrying search after transport failure",
                request_id=request.request_id,
                attempt=attempt,
                max_attempts=self.retry_attempts,
                delay_seconds=delay
            )
            await asyncio.sleep(delay)

    async def _submit_with_timeout(self, request: SearchRequest) -> SearchOutcome:
        if self.timeout_seconds is None:
            return await self.gateway.submit(request)
        try:
            return await asyncio.wait_for(
                self.gateway.submit(request),
                timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Search timed out",
                request_id=request.request_id,
                timeout_seconds=self.timeout_seconds
            )
            return Failure(
                error_kind=ErrorKind.TIMEOUT,
                message=f"Search timed out after {self.timeout_seconds:g} seconds",
                details={"timeout_seconds": self.timeout_seconds}
            )

    def _unexpected_failure(self, error: Exception, request_id: str) -> Failure:
        context = ErrorContext.from_exception(error, request_id=request_id)
        logger.error(
            f"Unexpected error during search: {context.summary()}",
            **context.to_log_fields()
        )
        return Failure(
            error_kind=ErrorKind.INTERNAL,
            message=UNEXPECTED_ERROR_MESSAGE,
            details=context.to_details()
        )

    def _dispatch_outcome(self, request_id: str, outcome: SearchOutcome) -> None:
        if isinstance(outcome, Success):
            action = ResolveSuccess(request_id=request_id, outcome=outcome)
        elif isinstance(outcome, Failure):
            action = ResolveFailure(
                request_id=request_id,
                error_message=outcome.message,
                error_kind=outcome.error_kind
            )
        else:
            action = ResolveFailure(
                request_id=request_id,
                error_message=UNEXPECTED_ERROR_MESSAGE,
                error_kind=ErrorKind.INTERNAL
            )

        state = self.store.dispatch(action)
        if state.active_request_id == request_id:
            logger.info(
                "Search resolved",
                request_id=request_id,
                status=state.status.value,
                total_results=state.total_results
            )
