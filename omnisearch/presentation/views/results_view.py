"""
Results view models.

Everything here is a pure function of the search session state. The
status is always checked before any payload field is read, since payload
fields are only guaranteed to be reset by the store transitions.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from ...core.entities import Clear, ResultItem, SearchSessionState, SearchStatus
from ...core.interfaces import NavigatorInterface
from ...shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ITEMS_PER_PAGE = 9

_PRICE_NOISE = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d*\.?\d+|\d+")


class SortOption(Enum):
    """Orderings offered by the results view."""
    RELEVANCE = "relevance"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    RATING = "rating"

    @classmethod
    def parse(cls, value: Union["SortOption", str]) -> "SortOption":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown sort option '{value}' (expected one of: {valid})")


def _to_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    match = _LEADING_NUMBER.match(str(value).strip())
    return float(match.group()) if match else 0.0


def coerce_price(price: Any) -> float:
    """
    Read a display price as a number for ordering.

    Everything except digits and dots is stripped first, so ``"1 299,00 €"``
    and ``"$12.50"`` both yield a number. Unparsable prices count as 0.
    """
    if isinstance(price, str):
        price = _PRICE_NOISE.sub("", price)
    return _to_number(price)


def coerce_rating(rating: Any) -> float:
    """Read a rating as a number for ordering; missing ratings count as 0."""
    return _to_number(rating)


def sort_results(
    results: Sequence[ResultItem],
    sort: Union[SortOption, str] = SortOption.RELEVANCE
) -> List[ResultItem]:
    """
    Order results for display.

    Relevance keeps the order of the remote service. Ties keep their
    relative order in every ordering.
    """
    sort = SortOption.parse(sort)
    ordered = list(results)
    if sort == SortOption.PRICE_ASC:
        ordered.sort(key=lambda item: coerce_price(item.price))
    elif sort == SortOption.PRICE_DESC:
        ordered.sort(key=lambda item: coerce_price(item.price), reverse=True)
    elif sort == SortOption.RATING:
        ordered.sort(key=lambda item: coerce_rating(item.rating), reverse=True)
    return ordered


@dataclass(frozen=True)
class Page:
    """One page of results."""
    items: Tuple[ResultItem, ...]
    page: int
    total_pages: int
    items_per_page: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(
    results: Sequence[ResultItem],
    page: int = 1,
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
) -> Page:
    """
    Cut one page out of the results.

    Args:
        results: Ordered results
        page: 1-based page number, clamped into the valid range
        items_per_page: Page size

    Returns:
        Page: The selected page
    """
    if items_per_page < 1:
        raise ValueError("items_per_page must be at least 1")
    total_pages = max(1, math.ceil(len(results) / items_per_page))
    page = min(max(1, page), total_pages)
    start = (page - 1) * items_per_page
    return Page(
        items=tuple(results[start:start + items_per_page]),
        page=page,
        total_pages=total_pages,
        items_per_page=items_per_page
    )


@dataclass(frozen=True)
class LoadingStep:
    """One stage of the loading indicator."""
    title: str
    description: str
    duration_seconds: float


LOADING_STEPS: Tuple[LoadingStep, ...] = (
    LoadingStep("Analysing query", "Preparing the search", 1.5),
    LoadingStep("Searching databases", "Exploring information sources", 2.0),
    LoadingStep("Processing results", "Analysing and ranking results", 1.5),
    LoadingStep("Finalising", "Preparing the display", 1.0),
)


@dataclass(frozen=True)
class LoadingProgress:
    """Position of the loading indicator at a point in time."""
    step_index: int
    steps: Tuple[LoadingStep, ...]
    percent: float

    @property
    def is_complete(self) -> bool:
        return self.step_index >= len(self.steps)

    @property
    def current_step(self) -> Optional[LoadingStep]:
        return None if self.is_complete else self.steps[self.step_index]


def loading_progress(
    elapsed_seconds: float,
    query: str = "",
    steps: Sequence[LoadingStep] = LOADING_STEPS
) -> LoadingProgress:
    """
    Compute the loading indicator for the time spent so far.

    Progress advances one whole step at a time, as each step's duration
    elapses. The first step describes the query being processed.
    """
    steps = tuple(steps)
    if steps and query:
        first = steps[0]
        steps = (LoadingStep(first.title, f'Processing "{query}"', first.duration_seconds),) + steps[1:]

    index = 0
    remaining = max(0.0, elapsed_seconds)
    while index < len(steps) and remaining >= steps[index].duration_seconds:
        remaining -= steps[index].duration_seconds
        index += 1

    percent = 100.0 if not steps else min(100.0, index / len(steps) * 100)
    return LoadingProgress(step_index=index, steps=steps, percent=percent)


@dataclass(frozen=True)
class IdleView:
    """No search has been started, or the last one was cleared."""


@dataclass(frozen=True)
class LoadingView:
    query: str
    request_id: Optional[str]


@dataclass(frozen=True)
class ErrorView:
    query: str
    message: str
    error_kind: Optional[str] = None
    can_retry: bool = True


@dataclass(frozen=True)
class EmptyView:
    query: str
    processing_time: Optional[float] = None
    suggestions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResultListView:
    query: str
    page: Page
    total_results: int
    sort: SortOption
    processing_time: Optional[float] = None
    suggestions: Tuple[str, ...] = field(default_factory=tuple)


ResultsView = Union[IdleView, LoadingView, ErrorView, EmptyView, ResultListView]


def render_results_view(
    state: SearchSessionState,
    sort: Union[SortOption, str] = SortOption.RELEVANCE,
    page: int = 1,
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
) -> ResultsView:
    """
    Select the view model for a state.

    Args:
        state: Current search session state
        sort: Ordering for the result list
        page: Requested page, clamped into range
        items_per_page: Page size

    Returns:
        ResultsView: Exactly one view model
    """
    if state.status == SearchStatus.LOADING:
        return LoadingView(query=state.query or "", request_id=state.active_request_id)

    if state.status == SearchStatus.ERROR:
        return ErrorView(
            query=state.query or "",
            message=state.error_message or "",
            error_kind=state.error_kind.value if state.error_kind else None
        )

    if state.status == SearchStatus.SUCCESS:
        if not state.results:
            return EmptyView(
                query=state.query or "",
                processing_time=state.processing_time,
                suggestions=tuple(state.suggestions)
            )
        sort = SortOption.parse(sort)
        return ResultListView(
            query=state.query or "",
            page=paginate(sort_results(state.results, sort), page, items_per_page),
            total_results=state.total_results,
            sort=sort,
            processing_time=state.processing_time,
            suggestions=tuple(state.suggestions)
        )

    return IdleView()


class ResultsController:
    """
    Results view bound to a store.

    Holds the user's sort and page choices and owns the retry action.
    """

    def __init__(
        self,
        store: Any,
        navigator: NavigatorInterface,
        entry_path: str = "/",
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    ):
        """
        Initialize the controller.

        Args:
            store: Search state store
            navigator: Navigator used by retry
            entry_path: Address of the search entry view
            items_per_page: Page size
        """
        self.store = store
        self.navigator = navigator
        self.entry_path = entry_path
        self.items_per_page = items_per_page
        self.sort = SortOption.RELEVANCE
        self.page = 1

    def set_sort(self, sort: Union[SortOption, str]) -> None:
        """Change the ordering and go back to the first page."""
        self.sort = SortOption.parse(sort)
        self.page = 1

    def set_page(self, page: int) -> None:
        self.page = page

    def current_view(self) -> ResultsView:
        return render_results_view(
            self.store.state,
            sort=self.sort,
            page=self.page,
            items_per_page=self.items_per_page
        )

    def subscribe(self, on_view: Callable[[ResultsView], None]) -> Callable[[], None]:
        """Re-render on every state change."""
        return self.store.subscribe(lambda _state: on_view(self.current_view()))

    def retry(self) -> None:
        """Drop the failed search and return to the entry view."""
        logger.info(
            "Search retry requested",
            request_id=self.store.state.active_request_id
        )
        self.store.dispatch(Clear())
        self.page = 1
        self.navigator.navigate(self.entry_path)
