"""HTTP client with timeout, retry and exponential backoff for the catalog API."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from src.common.config import CatalogSettings, settings

logger = logging.getLogger(__name__)


class HTTPClient:
    """Thin ``requests.Session`` wrapper used by the catalog client.

    Transient failures (connection errors, timeouts, 5xx, 429) are
    retried with exponential backoff. Other 4xx responses are raised
    immediately.
    """

    def __init__(self, config: CatalogSettings | None = None) -> None:
        self.config = config or settings.catalog
        self._session = requests.Session()
        self._session.headers.update({
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        })

    def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send a GET request with retries.

        Args:
            url: Target URL.
            params: Query parameters.

        Returns:
            requests.Response object with a 2xx status.

        Raises:
            requests.RequestException: After all retries exhausted, or
                immediately for a non-retryable 4xx.
        """
        max_retries = max(self.config.max_retries, 1)
        last_exc: Exception | None = None
        for attempt in range(max_retries):
            try:
                resp = self._session.get(
                    url,
                    params=params,
                    timeout=self.config.request_timeout,
                )
                resp.raise_for_status()
                return resp

            except requests.RequestException as exc:
                last_exc = exc

                if (
                    isinstance(exc, requests.HTTPError)
                    and exc.response is not None
                    and 400 <= exc.response.status_code < 500
                    and exc.response.status_code != 429
                ):
                    logger.warning("Request failed (%d, no retry): %s", exc.response.status_code, url)
                    raise

                if attempt + 1 == max_retries:
                    break

                wait_time = self.config.backoff_base ** attempt
                logger.warning(
                    "Request failed (attempt %d/%d): %s, retrying in %.1fs",
                    attempt + 1,
                    max_retries,
                    exc,
                    wait_time,
                )
                time.sleep(wait_time)

        logger.error("Request failed after %d attempts: %s", max_retries, url)
        raise last_exc  # type: ignore[misc]

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``url`` and decode the JSON body."""
        return self.get(url, params=params).json()

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
