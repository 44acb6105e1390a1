"""Typed client for the upstream product catalog (dummyjson-compatible).

Usage:
    with CatalogClient() as client:
        response = client.list_products(category="smartphones")
        product = client.get_product(1)
        categories = client.list_categories()

Every failure surfaces as ``CatalogError`` so callers never compute
over a partial or error-shaped list.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError

from src.common.config import CatalogSettings, settings
from src.common.models import Category, Product, ProductsResponse

from .http_client import HTTPClient

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """The catalog could not be fetched or returned an unusable payload."""


class ProductNotFoundError(CatalogError):
    """The requested product does not exist upstream."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class CatalogClient:
    """Fetch products and categories from the catalog API."""

    def __init__(
        self,
        config: CatalogSettings | None = None,
        http: HTTPClient | None = None,
    ) -> None:
        self.config = config or settings.catalog
        self._http = http or HTTPClient(self.config)
        self.base_url = self.config.base_url.rstrip("/")

    def list_products(self, category: str | None = None) -> ProductsResponse:
        """Fetch the full product list, optionally for one category.

        ``limit=0`` asks the upstream for every product in one call.
        """
        if category:
            url = f"{self.base_url}/products/category/{quote(category, safe='')}"
        else:
            url = f"{self.base_url}/products"

        data = self._get_json(url, params={"limit": 0}, resource="products")
        try:
            response = ProductsResponse.model_validate(data)
        except ValidationError as exc:
            raise CatalogError(f"Malformed products payload: {exc}") from exc

        logger.info(
            "Fetched %d products (category=%s)",
            len(response.products),
            category or "all",
        )
        return response

    def get_product(self, product_id: int) -> Product:
        """Fetch one product by id.

        Raises:
            ProductNotFoundError: Upstream answered 404.
            CatalogError: Any other failure.
        """
        url = f"{self.base_url}/products/{product_id}"
        try:
            data = self._http.get_json(url)
        except requests.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 404:
                raise ProductNotFoundError(product_id) from exc
            raise CatalogError(f"Failed to fetch product {product_id}: {exc}") from exc
        except (requests.RequestException, ValueError) as exc:
            raise CatalogError(f"Failed to fetch product {product_id}: {exc}") from exc

        try:
            return Product.model_validate(data)
        except ValidationError as exc:
            raise CatalogError(f"Malformed product payload for {product_id}: {exc}") from exc

    def list_categories(self) -> list[Category]:
        """Fetch the category list.

        Older upstream versions return bare slugs instead of objects;
        both shapes are accepted.
        """
        data = self._get_json(f"{self.base_url}/products/categories", resource="categories")
        if not isinstance(data, list):
            raise CatalogError("Malformed categories payload: expected a list")

        categories: list[Category] = []
        for entry in data:
            if isinstance(entry, str):
                entry = {"slug": entry, "name": entry}
            try:
                categories.append(Category.model_validate(entry))
            except ValidationError as exc:
                raise CatalogError(f"Malformed category entry: {exc}") from exc
        return categories

    def _get_json(self, url: str, params: dict[str, Any] | None = None, resource: str = "") -> Any:
        try:
            return self._http.get_json(url, params=params)
        except (requests.RequestException, ValueError) as exc:
            # ValueError covers an undecodable JSON body.
            raise CatalogError(f"Failed to fetch {resource or url}: {exc}") from exc

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> CatalogClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
