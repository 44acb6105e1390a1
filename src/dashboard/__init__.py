# Dashboard: metric cards and product table core
"""
Dashboard module: pure metrics aggregation, the pagination/filter state
machine, and the session that feeds them from the catalog.
"""

from .metrics import compute_metrics
from .pagination import (
    CategoryChanged,
    PageRequested,
    PageView,
    PaginationController,
    PaginationState,
    SizeChanged,
    derive_page,
    transition,
)
from .session import DashboardSession

__all__ = [
    "CategoryChanged",
    "DashboardSession",
    "PageRequested",
    "PageView",
    "PaginationController",
    "PaginationState",
    "SizeChanged",
    "compute_metrics",
    "derive_page",
    "transition",
]
