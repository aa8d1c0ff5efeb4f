"""Search domain: request normalisation, serialisation and state transitions."""

from .request_normalizer import RequestNormalizer, IMAGE_QUERY_PREFIX
from .request_serializer import serialize_request
from .search_state_reducer import SearchStateReducer, reduce_search_state
from .routing import build_results_address, parse_results_address

__all__ = [
    'RequestNormalizer',
    'IMAGE_QUERY_PREFIX',
    'serialize_request',
    'SearchStateReducer',
    'reduce_search_state',
    'build_results_address',
    'parse_results_address'
]
