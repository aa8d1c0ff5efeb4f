"""
Core entities module for omnisearch.

This module provides access to all core entity classes used throughout
the application.
"""

from .search_entity import (
    InputType,
    SearchType,
    LocationContext,
    ImageUpload,
    SearchRequest,
    ResultItem
)
from .outcome_entity import (
    ErrorKind,
    Pending,
    Success,
    Failure,
    SearchOutcome
)
from .state_entity import (
    SearchStatus,
    SearchSessionState,
    INITIAL_STATE,
    StartSearch,
    ResolveSuccess,
    ResolveFailure,
    Clear,
    SearchAction
)

__all__ = [
    'InputType',
    'SearchType',
    'LocationContext',
    'ImageUpload',
    'SearchRequest',
    'ResultItem',
    'ErrorKind',
    'Pending',
    'Success',
    'Failure',
    'SearchOutcome',
    'SearchStatus',
    'SearchSessionState',
    'INITIAL_STATE',
    'StartSearch',
    'ResolveSuccess',
    'ResolveFailure',
    'Clear',
    'SearchAction'
]
