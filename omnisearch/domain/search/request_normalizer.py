"""
Domain service that turns raw user input into canonical search requests.

Text and voice input are validated and normalised; images are encoded
through the injected encoder, which is the only suspension point here.
"""

import os
import re
import uuid
from pathlib import PurePath
from typing import Optional

from ...core.entities import (
    ImageUpload,
    InputType,
    LocationContext,
    SearchRequest,
    SearchType
)
from ...core.interfaces import ImageEncoderInterface, ImageSource
from ...shared.exceptions import SearchValidationError
from ...shared.logging import get_logger
from ...shared.validation import MaxLengthRule, NotBlankRule, ValidationEngine

logger = get_logger(__name__)

IMAGE_QUERY_PREFIX = "Image search: "

_WHITESPACE = re.compile(r"\s+")


class RequestNormalizer:
    """
    Builds SearchRequest values.

    Every request gets a random UUID4 unless the caller passes the id it
    already allocated for the same attempt.
    """

    def __init__(
        self,
        image_encoder: ImageEncoderInterface,
        max_query_length: int = 1000
    ):
        """
        Initialize the normalizer.

        Args:
            image_encoder: Encoder used for image input
            max_query_length: Longest accepted text query
        """
        self.image_encoder = image_encoder
        self.max_query_length = max_query_length
        self._engine = (
            ValidationEngine()
            .add_rule("query", NotBlankRule("Search query must not be empty"))
            .add_rule(
                "query",
                MaxLengthRule(
                    f"Search query exceeds max length of {max_query_length}",
                    max_length=max_query_length
                )
            )
        )

    @staticmethod
    def new_request_id() -> str:
        """Allocate a fresh, unpredictable request id."""
        return str(uuid.uuid4())

    @staticmethod
    def image_display_query(image: ImageSource) -> str:
        """
        Synthesize the display query for an image search.

        Args:
            image: Image path or upload

        Returns:
            str: ``"Image search: <file name>"``
        """
        if isinstance(image, ImageUpload):
            name = image.filename
        else:
            name = PurePath(os.fspath(image)).name
        return f"{IMAGE_QUERY_PREFIX}{name}"

    def normalize_query(self, raw_input: Optional[str]) -> str:
        """
        Validate and normalise text or voice input.

        Args:
            raw_input: Text as typed or transcribed

        Returns:
            str: Trimmed query with whitespace runs collapsed

        Raises:
            SearchValidationError: If the input is empty or too long
        """
        result = self._engine.validate({"query": raw_input})
        if not result.is_valid:
            raise SearchValidationError(
                "; ".join(result.error_messages()),
                field="query"
            )
        return _WHITESPACE.sub(" ", raw_input.strip())

    async def build_request(
        self,
        raw_input: Optional[str],
        input_type: InputType,
        location_snapshot: Optional[LocationContext] = None,
        user_id: Optional[str] = None,
        search_type: SearchType = SearchType.ALL,
        image: Optional[ImageSource] = None,
        request_id: Optional[str] = None
    ) -> SearchRequest:
        """
        Build a canonical search request.

        Args:
            raw_input: Typed text or transcript; ignored for image input
            input_type: Provenance of the query
            location_snapshot: Location known at build time
            user_id: Caller identity, None for anonymous
            search_type: Result-category filter
            image: Image to encode, required for image input
            request_id: Id already allocated for this attempt

        Returns:
            SearchRequest: The immutable request

        Raises:
            SearchValidationError: If the input is invalid
            ImageEncodingError: If the image cannot be read
        """
        image_payload = None

        if input_type == InputType.IMAGE:
            if image is None:
                raise SearchValidationError("Image search requires an image file", field="image")
            query = self.image_display_query(image)
            image_payload = await self.image_encoder.encode(image)
        else:
            query = self.normalize_query(raw_input)

        request = SearchRequest(
            request_id=request_id or self.new_request_id(),
            query=query,
            input_type=input_type,
            search_type=SearchType.parse(search_type),
            location_context=location_snapshot,
            image_payload=image_payload,
            user_id=user_id
        )

        logger.debug(
            "Search request built",
            request_id=request.request_id,
            input_type=input_type.value,
            search_type=request.search_type.value,
            anonymous=request.is_anonymous,
            has_location=location_snapshot is not None
        )
        return request
