"""Adapters for the remote search endpoint and image encoding."""

from .image_encoder import DataUrlImageEncoder, guess_content_type, to_data_url
from .response_parser import parse_search_response
from .search_gateway import RemoteSearchGateway
from .simulated_gateway import SimulatedSearchGateway

__all__ = [
    'DataUrlImageEncoder',
    'guess_content_type',
    'to_data_url',
    'parse_search_response',
    'RemoteSearchGateway',
    'SimulatedSearchGateway'
]
