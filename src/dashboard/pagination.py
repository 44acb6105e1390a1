"""Client-side pagination and category filter state for the products table.

State changes go through one transition function driven by explicit
events:

    CategoryChanged -> page resets to 1 (only if the category differs)
    SizeChanged     -> page resets to 1 (only if the size differs)
    PageRequested   -> page clamped into [1, total_pages]

``derive_page`` is pure: the visible slice and navigation bounds are
recomputed from the current product list and state on every call.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Sequence, Union

from src.common.config import settings
from src.common.models import Product

logger = logging.getLogger(__name__)


def page_size_options() -> tuple[int, ...]:
    return tuple(settings.dashboard.page_size_options)


@dataclass(frozen=True)
class PaginationState:
    """Current page, page size and category filter (None = all categories)."""
    page: int = 1
    size: int = field(default_factory=lambda: settings.dashboard.default_page_size)
    category: str | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")

    def to_dict(self) -> dict:
        return {"page": self.page, "size": self.size, "category": self.category}


@dataclass(frozen=True)
class PageView:
    """The visible slice of the product list plus navigation bounds."""
    visible: list[Product]
    total_items: int
    total_pages: int
    effective_page: int
    size: int

    @property
    def start_index(self) -> int:
        """Zero-based index of the first visible product."""
        return (self.effective_page - 1) * self.size

    @property
    def end_index(self) -> int:
        """Exclusive end index, truncated to the list length."""
        return min(self.start_index + self.size, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.effective_page > 1

    @property
    def has_next(self) -> bool:
        return self.effective_page < self.total_pages

    def caption(self) -> str:
        """Table footer text, e.g. "Showing 21-25 of 25 products"."""
        first = self.start_index + 1 if self.total_items else 0
        return f"Showing {first}-{self.end_index} of {self.total_items} products"

    def to_dict(self) -> dict:
        return {
            "visible": [p.to_dict() for p in self.visible],
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "effectivePage": self.effective_page,
            "size": self.size,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "hasPrevious": self.has_previous,
            "hasNext": self.has_next,
        }


# === Events ===

@dataclass(frozen=True)
class CategoryChanged:
    category: str | None


@dataclass(frozen=True)
class SizeChanged:
    size: int


@dataclass(frozen=True)
class PageRequested:
    page: int
    total_items: int


PaginationEvent = Union[CategoryChanged, SizeChanged, PageRequested]


# === Pure functions ===

def total_pages(total_items: int, size: int) -> int:
    """Number of pages; an empty list still has one (empty) page."""
    return max(math.ceil(total_items / size), 1)


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def derive_page(products: Sequence[Product], state: PaginationState) -> PageView:
    """Compute the visible slice for ``state``.

    Out-of-range pages are clamped, never raised on.
    """
    total_items = len(products)
    pages = total_pages(total_items, state.size)
    effective = clamp_page(state.page, pages)
    start = (effective - 1) * state.size
    return PageView(
        visible=list(products[start:start + state.size]),
        total_items=total_items,
        total_pages=pages,
        effective_page=effective,
        size=state.size,
    )


def transition(
    state: PaginationState,
    event: PaginationEvent,
    size_options: Sequence[int] | None = None,
) -> PaginationState:
    """Apply one event to the pagination state.

    Raises:
        ValueError: ``SizeChanged`` with a size outside ``size_options``.
        TypeError: Unknown event type.
    """
    if isinstance(event, CategoryChanged):
        if event.category == state.category:
            return state
        return replace(state, page=1, category=event.category)

    if isinstance(event, SizeChanged):
        options = tuple(size_options) if size_options is not None else page_size_options()
        if event.size not in options:
            raise ValueError(f"page size must be one of {options}, got {event.size}")
        if event.size == state.size:
            return state
        return replace(state, page=1, size=event.size)

    if isinstance(event, PageRequested):
        pages = total_pages(event.total_items, state.size)
        return replace(state, page=clamp_page(event.page, pages))

    raise TypeError(f"Unknown pagination event: {event!r}")


# Sentinel for "category not supplied" in PaginationController.view
_UNCHANGED = object()


class PaginationController:
    """Holds the table's pagination state between renders.

    The stored category is the last one seen, so passing the same
    category on every render resets the page only the first time.

    Usage:
        controller = PaginationController()
        controller.select_category("laptops")
        view = controller.view(products)
        controller.go_to_page(view.effective_page + 1, len(products))
    """

    def __init__(
        self,
        state: PaginationState | None = None,
        size_options: Sequence[int] | None = None,
    ) -> None:
        self.size_options = tuple(size_options) if size_options is not None else page_size_options()
        self.state = state or PaginationState()

    def dispatch(self, event: PaginationEvent) -> PaginationState:
        new_state = transition(self.state, event, self.size_options)
        if new_state != self.state:
            logger.debug("Pagination %s -> %s on %s", self.state, new_state, event)
        self.state = new_state
        return new_state

    def select_category(self, category: str | None) -> bool:
        """Apply a filter selection. Returns True if the category changed."""
        before = self.state.category
        self.dispatch(CategoryChanged(category))
        return self.state.category != before

    def set_page_size(self, size: int) -> PaginationState:
        return self.dispatch(SizeChanged(size))

    def go_to_page(self, page: int, total_items: int) -> PaginationState:
        return self.dispatch(PageRequested(page, total_items))

    def view(self, products: Sequence[Product], category: object = _UNCHANGED) -> PageView:
        """Derive the visible page, applying a category change first if given."""
        if category is not _UNCHANGED:
            self.select_category(category)  # type: ignore[arg-type]
        return derive_page(products, self.state)
