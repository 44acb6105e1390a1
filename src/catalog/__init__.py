# Catalog: upstream product API access
"""
Catalog module: HTTP access to the upstream product catalog plus the
explicit query cache keyed by (resource, filter key).
"""

from .cache import CacheEntry, FetchStatus, QueryCache, RequestToken
from .client import CatalogClient, CatalogError, ProductNotFoundError
from .http_client import HTTPClient

__all__ = [
    "CacheEntry",
    "CatalogClient",
    "CatalogError",
    "FetchStatus",
    "HTTPClient",
    "ProductNotFoundError",
    "QueryCache",
    "RequestToken",
]
