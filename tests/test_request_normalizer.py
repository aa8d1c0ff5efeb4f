"""
Tests for request normalisation, serialisation and results addresses.
"""

from pathlib import Path

import pytest

from omnisearch.core.entities import (
    ImageUpload,
    InputType,
    LocationContext,
    SearchRequest,
    SearchType
)
from omnisearch.domain.search import (
    RequestNormalizer,
    build_results_address,
    parse_results_address,
    serialize_request
)
from omnisearch.shared.exceptions import SearchValidationError

from conftest import FAKE_IMAGE_PAYLOAD


class TestRequestNormalizer:
    """Test suite for RequestNormalizer."""

    def test_request_ids_are_unique(self):
        ids = {RequestNormalizer.new_request_id() for _ in range(10_000)}

        assert len(ids) == 10_000

    def test_normalize_query_trims_and_collapses_whitespace(self, normalizer):
        assert normalizer.normalize_query("  phone \t  repair \n") == "phone repair"

    @pytest.mark.parametrize("raw", ["", "   ", "\n\t", None])
    def test_blank_query_is_rejected(self, normalizer, raw):
        with pytest.raises(SearchValidationError):
            normalizer.normalize_query(raw)

    def test_overlong_query_is_rejected(self, image_encoder):
        normalizer = RequestNormalizer(image_encoder, max_query_length=5)

        with pytest.raises(SearchValidationError, match="max length"):
            normalizer.normalize_query("phone repair")

    @pytest.mark.parametrize("image, expected", [
        ("/tmp/photos/red shoe.jpg", "Image search: red shoe.jpg"),
        (Path("shoe.png"), "Image search: shoe.png"),
        (ImageUpload("upload.webp", b"\x00"), "Image search: upload.webp"),
    ])
    def test_image_display_query(self, image, expected):
        assert RequestNormalizer.image_display_query(image) == expected

    @pytest.mark.asyncio
    async def test_build_text_request(self, normalizer, paris):
        request = await normalizer.build_request(
            " phone  repair ",
            InputType.TEXT,
            location_snapshot=paris,
            user_id="user-1",
            search_type="service"
        )

        assert request.query == "phone repair"
        assert request.input_type == InputType.TEXT
        assert request.search_type == SearchType.SERVICE
        assert request.location_context is paris
        assert request.user_id == "user-1"
        assert request.image_payload is None
        assert request.request_id

    @pytest.mark.asyncio
    async def test_build_request_keeps_given_request_id(self, normalizer):
        request = await normalizer.build_request("q", InputType.VOICE, request_id="req-42")

        assert request.request_id == "req-42"
        assert request.is_anonymous

    @pytest.mark.asyncio
    async def test_build_image_request_ignores_raw_input(self, normalizer, image_encoder):
        request = await normalizer.build_request(
            "ignored",
            InputType.IMAGE,
            image="/tmp/shoe.jpg"
        )

        assert request.query == "Image search: shoe.jpg"
        assert request.image_payload == FAKE_IMAGE_PAYLOAD
        assert image_encoder.sources == ["/tmp/shoe.jpg"]

    @pytest.mark.asyncio
    async def test_build_image_request_requires_image(self, normalizer):
        with pytest.raises(SearchValidationError):
            await normalizer.build_request("", InputType.IMAGE)

    @pytest.mark.asyncio
    async def test_every_build_gets_a_new_id(self, normalizer):
        first = await normalizer.build_request("q", InputType.TEXT)
        second = await normalizer.build_request("q", InputType.TEXT)

        assert first.request_id != second.request_id

    def test_image_payload_only_on_image_requests(self):
        with pytest.raises(ValueError):
            SearchRequest(
                request_id="req-1",
                query="q",
                input_type=InputType.TEXT,
                image_payload=FAKE_IMAGE_PAYLOAD
            )


class TestSerializeRequest:
    """Test suite for the wire format."""

    def _request(self, **kwargs) -> SearchRequest:
        options = {
            "request_id": "req-1",
            "query": "phone repair",
            "input_type": InputType.TEXT,
        }
        options.update(kwargs)
        return SearchRequest(**options)

    def test_minimal_body(self):
        body = serialize_request(self._request())

        assert body["query"] == "phone repair"
        assert body["type"] == "all"
        assert body["inputType"] == "text"
        assert body["requestId"] == "req-1"
        assert "timestamp" in body
        assert "location" not in body
        assert "imageData" not in body
        assert "uid" not in body

    def test_timestamp_is_utc(self):
        body = serialize_request(self._request())

        assert body["timestamp"].endswith("+00:00")

    @pytest.mark.parametrize("latitude, longitude", [
        (90, 180),
        (-90.0, -180.0),
        (0, 0),
    ])
    def test_boundary_coordinates_are_sent(self, latitude, longitude):
        location = LocationContext(latitude=latitude, longitude=longitude)

        body = serialize_request(self._request(location_context=location))

        assert body["location"]["latitude"] == latitude
        assert body["location"]["longitude"] == longitude

    def test_full_location_is_sent(self, paris):
        body = serialize_request(self._request(location_context=paris))

        assert body["location"] == {
            "latitude": 48.8566,
            "longitude": 2.3522,
            "city": "Paris",
            "country": "France",
        }

    @pytest.mark.parametrize("latitude, longitude", [
        (48.8566, None),
        (None, 2.3522),
        (float("nan"), 2.3522),
        (48.8566, float("inf")),
        (True, 2.3522),
        ("48.8566", 2.3522),
        (999.0, -500.0),
        (90.5, 2.3522),
        (48.8566, -180.01),
    ])
    def test_partial_location_is_omitted(self, latitude, longitude):
        location = LocationContext(
            country="France",
            city="Paris",
            latitude=latitude,
            longitude=longitude
        )

        body = serialize_request(self._request(location_context=location))

        assert "location" not in body

    def test_image_and_user_fields(self):
        body = serialize_request(self._request(
            input_type=InputType.IMAGE,
            query="Image search: shoe.jpg",
            image_payload=FAKE_IMAGE_PAYLOAD,
            user_id="user-1"
        ))

        assert body["imageData"] == FAKE_IMAGE_PAYLOAD
        assert body["uid"] == "user-1"
        assert body["inputType"] == "image"


class TestResultsAddress:
    """Test suite for results-view addresses."""

    def test_address_carries_query_and_request_id(self):
        address = build_results_address("phone & repair", "req-1")

        assert address.startswith("/search?")
        assert parse_results_address(address) == ("phone & repair", "req-1")

    def test_custom_results_path(self):
        assert build_results_address("q", "req-1", "/results").startswith("/results?q=q")

    def test_missing_parameters(self):
        assert parse_results_address("/search") == (None, None)
