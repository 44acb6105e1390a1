"""Dashboard session: catalog fetches, cache and table state in one place.

The session always computes from the most recently delivered complete
product list for the current filter key. Fetch failures propagate as
``CatalogError`` and leave an ``error`` entry in the cache.
"""

from __future__ import annotations

import logging

from src.catalog.cache import QueryCache
from src.catalog.client import CatalogClient
from src.common.models import Category, Product, ProductMetrics

from .metrics import compute_metrics
from .pagination import PageView, PaginationController, PaginationState

logger = logging.getLogger(__name__)

PRODUCTS = "products"
CATEGORIES = "categories"
PRODUCT_DETAIL = "product"


class DashboardSession:
    """One user's view of the dashboard."""

    def __init__(
        self,
        client: CatalogClient | None = None,
        cache: QueryCache | None = None,
        controller: PaginationController | None = None,
    ) -> None:
        self.client = client if client is not None else CatalogClient()
        self.cache = cache if cache is not None else QueryCache()
        self.controller = controller if controller is not None else PaginationController()

    @property
    def state(self) -> PaginationState:
        return self.controller.state

    # --- Data ---

    def products(self, category: str | None = None, use_filter: bool = True) -> list[Product]:
        """Product list for ``category``, or for the current filter if ``use_filter``."""
        key = self.state.category if use_filter and category is None else category
        response = self.cache.fetch(PRODUCTS, key, lambda: self.client.list_products(key))
        return response.products

    def categories(self) -> list[Category]:
        return self.cache.fetch(CATEGORIES, None, self.client.list_categories)

    def product(self, product_id: int) -> Product:
        return self.cache.fetch(PRODUCT_DETAIL, product_id, lambda: self.client.get_product(product_id))

    def metrics(self) -> ProductMetrics:
        """Metric cards, always over the unfiltered catalog."""
        return compute_metrics(self.products(use_filter=False))

    def page(self) -> PageView:
        return self.controller.view(self.products())

    # --- Table events ---

    def select_category(self, category: str | None) -> bool:
        """Switch the filter key. Returns True if it changed.

        The cache entry of the category being left is dropped so a late
        response for it cannot be stored. The unfiltered list is kept:
        the metric cards read it regardless of the filter.
        """
        previous = self.state.category
        changed = self.controller.select_category(category)
        if changed:
            if previous is not None:
                self.cache.invalidate(PRODUCTS, previous)
            logger.info("Category filter %s -> %s", previous or "all", category or "all")
        return changed

    def set_page_size(self, size: int) -> PaginationState:
        return self.controller.set_page_size(size)

    def go_to_page(self, page: int) -> PaginationState:
        return self.controller.go_to_page(page, len(self.products()))
