"""Shared test fixtures for the product dashboard."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.models import Product, ProductsResponse


def make_product(product_id: int, **overrides) -> Product:
    """Build a Product with plausible defaults."""
    data = {
        "id": product_id,
        "title": f"Product {product_id}",
        "description": f"Description of product {product_id}",
        "price": 10.0,
        "discountPercentage": 5.0,
        "rating": 4.0,
        "stock": 50,
        "brand": "Acme",
        "category": "misc",
        "thumbnail": f"https://cdn.example.com/{product_id}.png",
    }
    data.update(overrides)
    return Product.model_validate(data)


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def sample_product_data() -> dict:
    """Return a dummyjson-shaped product payload."""
    return {
        "id": 1,
        "title": "Essence Mascara Lash Princess",
        "description": "A popular mascara known for its volumizing effects.",
        "category": "beauty",
        "price": 9.99,
        "discountPercentage": 7.17,
        "rating": 4.94,
        "stock": 5,
        "tags": ["beauty", "mascara"],
        "brand": "Essence",
        "sku": "RCH45Q1A",
        "thumbnail": "https://cdn.dummyjson.com/products/images/beauty/thumbnail.png",
    }


@pytest.fixture
def sample_products() -> list[Product]:
    """Eight products over three categories with mixed ratings and stock."""
    return [
        make_product(1, price=9.99, rating=4.94, stock=5, category="beauty"),
        make_product(2, price=19.99, rating=3.8, stock=2, category="beauty"),
        make_product(3, price=1299.0, rating=4.6, stock=12, category="laptops"),
        make_product(4, price=549.0, rating=4.5, stock=5, category="smartphones"),
        make_product(5, price=899.0, rating=4.7, stock=30, category="smartphones"),
        make_product(6, price=14.5, rating=4.9, stock=1, category="beauty"),
        make_product(7, price=1999.0, rating=4.2, stock=7, category="laptops"),
        make_product(8, price=799.0, rating=4.55, stock=40, category="smartphones"),
    ]


@pytest.fixture
def sample_response(sample_products) -> ProductsResponse:
    return ProductsResponse(
        products=sample_products,
        total=len(sample_products),
        skip=0,
        limit=len(sample_products),
    )
