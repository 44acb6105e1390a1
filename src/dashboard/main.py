"""CLI entry point for the product dashboard.

Usage:
    python -m src.dashboard.main
    python -m src.dashboard.main --category smartphones --page 2 --size 20
    python -m src.dashboard.main --product-id 1
    python -m src.dashboard.main --category laptops --output data/exports/laptops.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from src.catalog.client import CatalogClient, CatalogError
from src.common.config import settings

from .session import DashboardSession

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product Dashboard: metrics & paginated catalog")
    parser.add_argument(
        "--category",
        type=str,
        help="Category slug to filter the product table (e.g., 'smartphones')",
    )
    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Table page to show (clamped to the available pages)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=settings.dashboard.default_page_size,
        choices=settings.dashboard.page_size_options,
        help="Rows per page",
    )
    parser.add_argument(
        "--product-id",
        type=int,
        help="Show a single product's detail instead of the table",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output JSON file path",
    )
    return parser


def run(args: argparse.Namespace, session: DashboardSession) -> dict:
    """Execute the CLI request and return the JSON-able result."""
    if args.product_id is not None:
        product = session.product(args.product_id)
        logger.info("=== Product %d: %s ===", product.id, product.title)
        logger.info("  Brand: %s | Category: %s", product.brand or "N/A", product.category)
        logger.info(
            "  Price: $%.2f (%.1f%% off) | Rating: %.1f | Stock: %d%s",
            product.price,
            product.discount_percentage,
            product.rating,
            product.stock,
            " (low stock)" if product.is_low_stock else "",
        )
        return {"product": product.to_dict()}

    metrics = session.metrics()
    logger.info("=== Metrics (%d products) ===", metrics.total_products)
    logger.info("  Average price: $%.2f", metrics.average_price)
    for product in metrics.top_low_stock_high_rated:
        logger.info("  Low stock, high rated: %s (stock=%d, rating=%.1f)", product.title, product.stock, product.rating)
    for info in metrics.top_categories:
        logger.info("  Top category: %s (%d)", info.name, info.count)

    session.select_category(args.category)
    if args.size != session.state.size:
        session.set_page_size(args.size)
    session.go_to_page(args.page)
    view = session.page()

    logger.info("=== Products (%s), page %d/%d ===", args.category or "all", view.effective_page, view.total_pages)
    for product in view.visible:
        logger.info(
            "  #%d %s | %s | $%.2f | stock %d | %.1f",
            product.id, product.title, product.brand or "N/A", product.price, product.stock, product.rating,
        )
    logger.info(view.caption())

    return {"metrics": metrics.to_dict(), "page": view.to_dict(), "state": session.state.to_dict()}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    with CatalogClient() as client:
        session = DashboardSession(client=client)
        try:
            result = run(args, session)
        except CatalogError as exc:
            logger.error("Catalog unavailable: %s", exc)
            return 1

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result, f, ensure_ascii=False, indent=2)
        logger.info("Output written to %s", output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
