"""Results view models."""

from .results_view import (
    DEFAULT_ITEMS_PER_PAGE,
    LOADING_STEPS,
    EmptyView,
    ErrorView,
    IdleView,
    LoadingProgress,
    LoadingStep,
    LoadingView,
    Page,
    ResultListView,
    ResultsController,
    ResultsView,
    SortOption,
    coerce_price,
    coerce_rating,
    loading_progress,
    paginate,
    render_results_view,
    sort_results
)

__all__ = [
    'DEFAULT_ITEMS_PER_PAGE',
    'LOADING_STEPS',
    'EmptyView',
    'ErrorView',
    'IdleView',
    'LoadingProgress',
    'LoadingStep',
    'LoadingView',
    'Page',
    'ResultListView',
    'ResultsController',
    'ResultsView',
    'SortOption',
    'coerce_price',
    'coerce_rating',
    'loading_progress',
    'paginate',
    'render_results_view',
    'sort_results'
]
