"""Flask application factory for the catalog proxy.

Usage:
    python -m src.web.app
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify

from src.catalog.cache import QueryCache
from src.catalog.client import CatalogClient
from src.common.config import Settings, settings as default_settings
from src.common.logging import setup_logging

from .routes import bp as catalog_api_bp

logger = logging.getLogger(__name__)


def create_app(
    client: CatalogClient | None = None,
    cache: QueryCache | None = None,
    config: Settings | None = None,
) -> Flask:
    config = config or default_settings
    setup_logging()

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config["DEFAULT_PAGE_SIZE"] = config.dashboard.default_page_size

    # One client and one cache per process, shared by all requests
    app.extensions["catalog_client"] = client if client is not None else CatalogClient(config.catalog)
    app.extensions["catalog_cache"] = (
        cache if cache is not None
        else QueryCache(config.catalog.cache_ttl_seconds, config.catalog.cache_max_entries)
    )

    app.register_blueprint(catalog_api_bp)

    @app.errorhandler(404)
    def _not_found(_err):
        return jsonify({"error": "Not found"}), 404

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    logger.info("Catalog proxy ready (upstream=%s)", config.catalog.base_url)
    return app


if __name__ == "__main__":
    application = create_app()
    application.run(
        host=default_settings.web.host,
        port=default_settings.web.port,
        debug=default_settings.web.debug,
    )
