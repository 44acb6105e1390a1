"""JSON proxy endpoints for the dashboard front end.

Each endpoint fetches through the shared QueryCache and logs request,
success and failure with its duration. Upstream failures become a
``{"error": ...}`` body with status 404 (unknown product) or 500.
"""

from __future__ import annotations

import logging
import time

from flask import Blueprint, current_app, jsonify, request

from src.catalog.cache import QueryCache
from src.catalog.client import CatalogClient, CatalogError, ProductNotFoundError
from src.common.logging import elapsed_ms
from src.dashboard.metrics import compute_metrics
from src.dashboard.pagination import PaginationState, derive_page, page_size_options
from src.dashboard.session import CATEGORIES, PRODUCT_DETAIL, PRODUCTS

logger = logging.getLogger(__name__)

bp = Blueprint("catalog_api", __name__, url_prefix="/api")


def _client() -> CatalogClient:
    return current_app.extensions["catalog_client"]


def _cache() -> QueryCache:
    return current_app.extensions["catalog_cache"]


def _category_arg() -> str | None:
    return request.args.get("category") or None


def _load_products(category: str | None):
    return _cache().fetch(PRODUCTS, category, lambda: _client().list_products(category))


@bp.route("/products", methods=["GET"])
def list_products():
    started = time.monotonic()
    category = _category_arg()
    logger.info("[API /products] Request received (category=%s)", category or "all")

    try:
        response = _load_products(category)
    except CatalogError as exc:
        logger.error("[API /products] Error: %s (%dms)", exc, elapsed_ms(started))
        return jsonify({"error": "Failed to fetch products"}), 500

    logger.info("[API /products] Success: %d products (%dms)", len(response.products), elapsed_ms(started))
    return jsonify(response.to_dict())


@bp.route("/products/<int:product_id>", methods=["GET"])
def get_product(product_id: int):
    started = time.monotonic()
    logger.info("[API /products/:id] Request received (productId=%d)", product_id)

    try:
        product = _cache().fetch(
            PRODUCT_DETAIL, product_id, lambda: _client().get_product(product_id)
        )
    except ProductNotFoundError:
        logger.warning("[API /products/:id] Product not found: %d (%dms)", product_id, elapsed_ms(started))
        return jsonify({"error": "Product not found"}), 404
    except CatalogError as exc:
        logger.error("[API /products/:id] Error: %s (%dms)", exc, elapsed_ms(started))
        return jsonify({"error": "Failed to fetch product"}), 500

    logger.info("[API /products/:id] Success: %r (%dms)", product.title, elapsed_ms(started))
    return jsonify(product.to_dict())


@bp.route("/categories", methods=["GET"])
def list_categories():
    started = time.monotonic()
    logger.info("[API /categories] Request received")

    try:
        categories = _cache().fetch(CATEGORIES, None, _client().list_categories)
    except CatalogError as exc:
        logger.error("[API /categories] Error: %s (%dms)", exc, elapsed_ms(started))
        return jsonify({"error": "Failed to fetch categories"}), 500

    logger.info("[API /categories] Success: %d categories (%dms)", len(categories), elapsed_ms(started))
    return jsonify([c.to_dict() for c in categories])


@bp.route("/metrics", methods=["GET"])
def get_metrics():
    started = time.monotonic()
    category = _category_arg()
    logger.info("[API /metrics] Request received (category=%s)", category or "all")

    try:
        response = _load_products(category)
    except CatalogError as exc:
        logger.error("[API /metrics] Error: %s (%dms)", exc, elapsed_ms(started))
        return jsonify({"error": "Failed to fetch products"}), 500

    metrics = compute_metrics(response.products)
    logger.info(
        "[API /metrics] Success: %d products, %d categories (%dms)",
        metrics.total_products, len(metrics.top_categories), elapsed_ms(started),
    )
    return jsonify(metrics.to_dict())


@bp.route("/products/page", methods=["GET"])
def get_products_page():
    started = time.monotonic()
    category = _category_arg()
    logger.info(
        "[API /products/page] Request received (category=%s, page=%s, size=%s)",
        category or "all", request.args.get("page"), request.args.get("size"),
    )
    try:
        page = int(request.args.get("page", 1))
        size = int(request.args.get("size", current_app.config["DEFAULT_PAGE_SIZE"]))
    except ValueError:
        logger.warning("[API /products/page] Bad request: non-integer page or size (%dms)", elapsed_ms(started))
        return jsonify({"error": "page and size must be integers"}), 400

    options = page_size_options()
    if size not in options:
        logger.warning("[API /products/page] Bad request: size %d not allowed (%dms)", size, elapsed_ms(started))
        return jsonify({"error": f"size must be one of {list(options)}"}), 400

    try:
        response = _load_products(category)
    except CatalogError as exc:
        logger.error("[API /products/page] Error: %s (%dms)", exc, elapsed_ms(started))
        return jsonify({"error": "Failed to fetch products"}), 500

    # Pages below 1 are clamped like pages past the end.
    state = PaginationState(page=max(page, 1), size=size, category=category)
    view = derive_page(response.products, state)
    logger.info(
        "[API /products/page] Success: page %d/%d, %d rows (%dms)",
        view.effective_page, view.total_pages, len(view.visible), elapsed_ms(started),
    )
    body = view.to_dict()
    body["category"] = category
    return jsonify(body)
