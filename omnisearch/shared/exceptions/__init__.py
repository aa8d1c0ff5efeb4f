"""
Error types and error context helpers.
"""

from .search_errors import (
    SearchError,
    SearchValidationError,
    ImageEncodingError,
    RemoteSearchError,
    SearchTransportError
)
from .error_context import ErrorContext

__all__ = [
    'SearchError',
    'SearchValidationError',
    'ImageEncodingError',
    'RemoteSearchError',
    'SearchTransportError',
    'ErrorContext'
]
