"""
Wire format of search requests.

The remote workflow expects a flat JSON object. Location is sent as one
nested block, and only when both coordinates are usable; a partial block
would be misread by the remote side, so it is dropped entirely.
"""

from typing import Any, Dict

from ...core.entities import SearchRequest


def serialize_request(request: SearchRequest) -> Dict[str, Any]:
    """
    Serialize a request to the JSON body of the search endpoint.

    Args:
        request: Canonical search request

    Returns:
        Dict[str, Any]: JSON-ready body
    """
    body: Dict[str, Any] = {
        "query": request.query,
        "type": request.search_type.value,
        "inputType": request.input_type.value,
        "requestId": request.request_id,
        "timestamp": request.created_at.isoformat(),
    }

    location = request.location_context
    if location is not None and location.has_coordinates():
        body["location"] = {
            "latitude": float(location.latitude),
            "longitude": float(location.longitude),
            "city": location.city,
            "country": location.country,
        }

    if request.image_payload is not None:
        body["imageData"] = request.image_payload

    if request.user_id is not None:
        body["uid"] = request.user_id

    return body
