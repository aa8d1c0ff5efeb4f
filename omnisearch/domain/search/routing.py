"""
Addresses of the results view.

The query and request id in the address are display hints. Loading an
address never re-runs a search by itself.
"""

from typing import Optional, Tuple
from urllib.parse import parse_qs, urlencode, urlsplit

DEFAULT_RESULTS_PATH = "/search"


def build_results_address(
    query: str,
    request_id: str,
    results_path: str = DEFAULT_RESULTS_PATH
) -> str:
    """
    Build the results-view address for a search.

    Args:
        query: Display query
        request_id: Request the view reflects
        results_path: Path of the results view

    Returns:
        str: ``<results_path>?q=<query>&requestId=<request_id>``
    """
    return f"{results_path}?{urlencode({'q': query, 'requestId': request_id})}"


def parse_results_address(address: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Read the display query and request id back from an address.

    Args:
        address: Address produced by build_results_address

    Returns:
        Tuple[Optional[str], Optional[str]]: ``(query, request_id)``
    """
    params = parse_qs(urlsplit(address).query)
    query = params.get("q", [None])[0]
    request_id = params.get("requestId", [None])[0]
    return query, request_id
