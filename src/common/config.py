"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class CatalogSettings(BaseModel):
    """Settings for the upstream catalog API."""
    base_url: str = "https://dummyjson.com"
    request_timeout: float = 10.0
    max_retries: int = 3
    backoff_base: float = 2.0
    cache_ttl_seconds: float = 300.0
    cache_max_entries: int = 512
    user_agent: str = "product-dashboard/1.0"


class DashboardSettings(BaseModel):
    """Settings for the table and metric cards."""
    page_size_options: list[int] = Field(default_factory=lambda: [10, 20, 50, 100])
    default_page_size: int = 10
    low_stock_threshold: int = 10

    @field_validator("page_size_options")
    @classmethod
    def _sizes_positive(cls, value: list[int]) -> list[int]:
        if not value or any(size < 1 for size in value):
            raise ValueError("page_size_options must be non-empty positive integers")
        return value


class WebSettings(BaseModel):
    """Flask proxy server settings."""
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


class Settings(BaseModel):
    """Top-level application settings."""
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    web: WebSettings = Field(default_factory=WebSettings)

    @classmethod
    def load(cls) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        loaded = cls(**data)
        loaded._apply_env_overrides()
        return loaded

    def _apply_env_overrides(self) -> None:
        """Apply environment overrides on top of file settings."""
        if url := os.getenv("CATALOG_BASE_URL"):
            self.catalog.base_url = url
        if timeout := os.getenv("CATALOG_REQUEST_TIMEOUT"):
            self.catalog.request_timeout = float(timeout)
        if ttl := os.getenv("CATALOG_CACHE_TTL"):
            self.catalog.cache_ttl_seconds = float(ttl)
        if host := os.getenv("WEB_HOST"):
            self.web.host = host
        if port := os.getenv("WEB_PORT"):
            self.web.port = int(port)


# Singleton settings instance
settings = Settings.load()
