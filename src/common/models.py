"""Shared Pydantic data models for the product dashboard.

These models define the data contracts between the catalog client,
the dashboard core and the proxy API. Upstream payloads use camelCase
keys; attributes are snake_case and ``to_dict()`` writes camelCase back.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .config import settings


# === Catalog ===

class Product(BaseModel):
    """One catalog item, immutable once fetched.

    Missing or null numeric fields are coerced to 0 and missing text
    fields to "" so one sparse upstream entry never rejects the list.
    """
    id: int
    title: str = ""
    description: str = ""
    price: float = Field(default=0.0, ge=0)
    discount_percentage: float = Field(default=0.0, ge=0, le=100, alias="discountPercentage")
    rating: float = Field(default=0.0, ge=0, le=5)
    stock: int = Field(default=0, ge=0)
    brand: str = ""
    category: str = ""
    thumbnail: str = ""

    model_config = {"populate_by_name": True, "frozen": True, "extra": "ignore"}

    @field_validator("price", "discount_percentage", "rating", "stock", mode="before")
    @classmethod
    def _null_number_to_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("title", "description", "brand", "category", "thumbnail", mode="before")
    @classmethod
    def _null_text_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_low_stock(self) -> bool:
        return self.stock < settings.dashboard.low_stock_threshold

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class Category(BaseModel):
    """Upstream category descriptor."""
    slug: str
    name: str = ""
    url: str = ""

    model_config = {"frozen": True, "extra": "ignore"}

    def to_dict(self) -> dict:
        return self.model_dump()


class ProductsResponse(BaseModel):
    """Envelope returned by the product list endpoints."""
    products: list[Product] = []
    total: int = 0
    skip: int = 0
    limit: int = 0

    model_config = {"extra": "ignore"}

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


# === Derived views ===

class CategoryInfo(BaseModel):
    """Category name with its product count in the current list."""
    name: str
    count: int = Field(ge=1)

    model_config = {"frozen": True}


class ProductMetrics(BaseModel):
    """Aggregates shown on the metric cards.

    The defaults are the defined zero value for an empty product list.
    """
    average_price: float = Field(default=0.0, alias="averagePrice")
    top_low_stock_high_rated: list[Product] = Field(
        default_factory=list, alias="topLowStockHighRated"
    )
    top_categories: list[CategoryInfo] = Field(default_factory=list, alias="topCategories")
    total_products: int = Field(default=0, alias="totalProducts")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
