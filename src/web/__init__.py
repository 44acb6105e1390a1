"""Flask proxy API over the catalog and the dashboard core."""

from .app import create_app

__all__ = ["create_app"]
