"""
Mapping from the remote JSON body to search outcomes.

Optional fields fall back to defaults (missing totals are counted from the
results). A body that cannot be mapped at all is a remote error.
"""

from typing import Any, Dict, List, Optional

from ...core.entities import ResultItem, Success
from ...shared.exceptions import RemoteSearchError

ERROR_STATUSES = frozenset({"error", "failed", "failure"})


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_duration(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def _remote_error_message(body: Dict[str, Any], default: str) -> str:
    for key in ("error", "message", "details"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return default


def _parse_results(raw_results: Any) -> List[ResultItem]:
    if raw_results is None:
        return []
    if not isinstance(raw_results, list):
        raise RemoteSearchError(
            "Search response field 'results' is not a list",
            field="results"
        )

    results = []
    for index, raw in enumerate(raw_results):
        if not isinstance(raw, dict):
            raise RemoteSearchError(
                f"Search result at position {index} is not an object",
                field="results",
                index=index
            )
        results.append(ResultItem.from_dict(raw))
    return results


def _parse_processing_time(body: Dict[str, Any]) -> Optional[float]:
    for key in ("processingTime", "executionTime"):
        value = body.get(key)
        if value is None:
            continue
        if not _is_duration(value):
            raise RemoteSearchError(
                f"Search response field '{key}' is not a non-negative number",
                field=key
            )
        return float(value)
    return None


def _parse_suggestions(raw: Any) -> List[str]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise RemoteSearchError(
            "Search response field 'suggestions' is not a list of strings",
            field="suggestions"
        )
    return raw


def parse_search_response(body: Any) -> Success:
    """
    Map a decoded response body to a Success outcome.

    Missing ``results`` and ``suggestions`` default to empty, missing
    ``totalResults`` falls back to the number of results, and a missing
    processing time stays None. ``processingTime`` wins over
    ``executionTime`` when both are present.

    Args:
        body: Decoded JSON body

    Returns:
        Success: The mapped outcome

    Raises:
        RemoteSearchError: If the body reports an error or is malformed
    """
    if not isinstance(body, dict):
        raise RemoteSearchError("Search response is not a JSON object")

    status = body.get("status")
    if isinstance(status, str) and status.strip().lower() in ERROR_STATUSES:
        raise RemoteSearchError(
            _remote_error_message(body, f"Search service reported status '{status}'"),
            remote_status=status
        )

    results = _parse_results(body.get("results"))

    total_results = body.get("totalResults")
    if total_results is None:
        total_results = len(results)
    elif not _is_count(total_results):
        raise RemoteSearchError(
            "Search response field 'totalResults' is not a non-negative integer",
            field="totalResults"
        )

    return Success(
        results=tuple(results),
        total_results=total_results,
        processing_time=_parse_processing_time(body),
        suggestions=tuple(_parse_suggestions(body.get("suggestions")))
    )
