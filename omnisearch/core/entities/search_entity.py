"""
Data models for search requests.

This module contains the value objects that describe one search attempt:
its provenance, its category filter, the location snapshot taken when it
was built and the opaque result records returned by the remote service.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class InputType(Enum):
    """Provenance of a query."""
    TEXT = "text"
    VOICE = "voice"
    IMAGE = "image"


class SearchType(Enum):
    """Result-category filter."""
    PRODUCT = "product"
    SERVICE = "service"
    ALL = "all"

    @classmethod
    def parse(cls, value: Any) -> "SearchType":
        """
        Parse a search type from its wire value.

        Args:
            value: A SearchType or its string value (case-insensitive)

        Returns:
            SearchType: Parsed search type

        Raises:
            ValueError: If the value names no search type
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown search type '{value}' (expected one of: {valid})")


def _is_coordinate(value: Any, limit: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and -limit <= value <= limit


@dataclass(frozen=True)
class LocationContext:
    """
    Snapshot of the caller's location at request time.

    A snapshot is never updated in place; the location provider hands out
    a new one whenever the known location changes.
    """
    country: str = ""
    city: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_fallback: bool = False

    def has_coordinates(self) -> bool:
        """Whether latitude is within [-90, 90] and longitude within [-180, 180]."""
        return _is_coordinate(self.latitude, 90) and _is_coordinate(self.longitude, 180)

    def to_dict(self) -> Dict[str, Any]:
        """Convert location to dictionary representation."""
        return {
            'country': self.country,
            'city': self.city,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'is_fallback': self.is_fallback
        }


@dataclass(frozen=True)
class ImageUpload:
    """An image held in memory, e.g. received from an upload form."""
    filename: str
    data: bytes
    content_type: Optional[str] = None


@dataclass(frozen=True)
class SearchRequest:
    """
    Canonical, immutable description of one search attempt.

    The request_id is the only correlation key between a request and the
    state it eventually resolves, so every attempt gets a fresh one.
    """
    request_id: str
    query: str
    input_type: InputType
    search_type: SearchType = SearchType.ALL
    location_context: Optional[LocationContext] = None
    image_payload: Optional[str] = None
    user_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.image_payload is not None and self.input_type != InputType.IMAGE:
            raise ValueError("image_payload is only allowed on image requests")

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert request to dictionary representation."""
        return {
            'request_id': self.request_id,
            'query': self.query,
            'input_type': self.input_type.value,
            'search_type': self.search_type.value,
            'location_context': self.location_context.to_dict() if self.location_context else None,
            'has_image': self.image_payload is not None,
            'user_id': self.user_id,
            'created_at': self.created_at.isoformat()
        }


_RESULT_FIELDS = (
    "id", "title", "description", "price", "rating",
    "image", "url", "type", "category", "tags"
)


@dataclass(frozen=True)
class ResultItem:
    """
    One display record returned by the remote search service.

    Fields are carried as received. Price and rating in particular may be
    strings or numbers; only the presentation layer coerces them, and only
    for ordering.
    """
    id: str = ""
    title: str = ""
    description: str = ""
    price: Any = None
    rating: Any = None
    image: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    tags: Tuple[str, ...] = ()
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultItem":
        """
        Build a result item from a raw remote record.

        Unknown keys are kept in ``extra`` so nothing the service sends is lost.
        """
        tags = data.get("tags") or ()
        if isinstance(tags, str):
            tags = (tags,)
        return cls(
            id=str(data["id"]) if data.get("id") is not None else "",
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            price=data.get("price"),
            rating=data.get("rating"),
            image=data.get("image"),
            url=data.get("url"),
            type=data.get("type"),
            category=data.get("category"),
            tags=tuple(str(tag) for tag in tags),
            extra={k: v for k, v in data.items() if k not in _RESULT_FIELDS}
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'price': self.price,
            'rating': self.rating,
            'image': self.image,
            'url': self.url,
            'type': self.type,
            'category': self.category,
            'tags': list(self.tags),
            **self.extra
        }
