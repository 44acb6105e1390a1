"""Metric-card aggregates over a product list.

All rankings rely on Python's stable sort: products with equal stock and
categories with equal counts keep their input (first-seen) order, so the
same list always produces identical output.
"""

from __future__ import annotations

from typing import Sequence

from src.common.models import CategoryInfo, Product, ProductMetrics

HIGH_RATING_THRESHOLD = 4.5
SHORTLIST_SIZE = 3


def average_price(products: Sequence[Product]) -> float:
    """Arithmetic mean of prices, 0 for an empty list. Not rounded."""
    if not products:
        return 0.0
    return sum(p.price for p in products) / len(products)


def low_stock_high_rated(
    products: Sequence[Product],
    min_rating: float = HIGH_RATING_THRESHOLD,
    limit: int = SHORTLIST_SIZE,
) -> list[Product]:
    """Products rated ``min_rating`` or better, fewest in stock first."""
    rated = [p for p in products if p.rating >= min_rating]
    return sorted(rated, key=lambda p: p.stock)[:limit]


def category_counts(products: Sequence[Product]) -> list[CategoryInfo]:
    """Product count per category, in first-seen order.

    Categories are compared as exact strings (no case folding or trimming).
    """
    counts: dict[str, int] = {}
    for product in products:
        counts[product.category] = counts.get(product.category, 0) + 1
    return [CategoryInfo(name=name, count=count) for name, count in counts.items()]


def top_categories(products: Sequence[Product], limit: int = SHORTLIST_SIZE) -> list[CategoryInfo]:
    """Most frequent categories, ties kept in first-seen order."""
    return sorted(category_counts(products), key=lambda c: -c.count)[:limit]


def compute_metrics(products: Sequence[Product]) -> ProductMetrics:
    """Compute every metric card for ``products``.

    An empty list yields the zero value (average 0, empty shortlists).
    """
    if not products:
        return ProductMetrics()

    return ProductMetrics(
        average_price=average_price(products),
        top_low_stock_high_rated=low_stock_high_rated(products),
        top_categories=top_categories(products),
        total_products=len(products),
    )
