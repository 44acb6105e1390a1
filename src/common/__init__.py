# Common utilities and shared modules
"""
Shared components used by the catalog client, the dashboard core and
the proxy API:
- Data models (Pydantic schemas)
- Logging configuration
- Project configuration
"""

from .config import settings, PROJECT_ROOT, Settings
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "Settings",
    "setup_logging",
]
