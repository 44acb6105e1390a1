"""Explicit query cache for catalog fetches.

Entries are keyed by ``(resource, filter_key)``, e.g. ``("products",
"smartphones")`` or ``("products", None)`` for the unfiltered list.
Each fetch is issued a request id; a result is only stored when its id
is still the latest for that key, so a slow response for a filter the
user has already left never overwrites a newer one.

Entries live in a ``cachetools.TTLCache``: they expire ``ttl_seconds``
after their last resolve/fail and the least recently used ones are
evicted once ``max_entries`` is reached.

Usage:
    cache = QueryCache(ttl_seconds=300, max_entries=512)
    response = cache.fetch("products", category, lambda: client.list_products(category))
    cache.invalidate("products", category)
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Hashable, TypeVar

from cachetools import TTLCache

from src.common.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Sentinel for "every filter key of a resource"
ANY = object()


class FetchStatus(str, Enum):
    """Lifecycle of a cache entry."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class CacheEntry:
    """State of one (resource, filter_key) query."""
    resource: str
    filter_key: Hashable
    status: FetchStatus = FetchStatus.IDLE
    data: Any = None
    error: str | None = None
    updated_at: float = 0.0  # timer reading of last resolve/fail
    request_id: int = 0


@dataclass(frozen=True)
class RequestToken:
    """Handle returned by ``begin`` and passed back to ``resolve``/``fail``."""
    resource: str
    filter_key: Hashable
    request_id: int


class QueryCache:
    """Thread-safe, size-bounded process-wide cache of catalog query results."""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        max_entries: int | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = (
            settings.catalog.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        )
        self.max_entries = (
            settings.catalog.cache_max_entries if max_entries is None else max_entries
        )
        self._timer = timer
        self._entries: TTLCache = TTLCache(
            maxsize=self.max_entries, ttl=self.ttl_seconds, timer=timer
        )
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, resource: str, filter_key: Hashable = None) -> CacheEntry | None:
        with self._lock:
            return self._entries.get((resource, filter_key))

    def begin(self, resource: str, filter_key: Hashable = None) -> RequestToken:
        """Mark a query as loading and issue a new request id.

        Previously stored data stays readable while the new fetch runs.
        """
        key = (resource, filter_key)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = CacheEntry(resource=resource, filter_key=filter_key)
                self._entries[key] = entry
            entry.request_id = next(self._ids)
            entry.status = FetchStatus.LOADING
            return RequestToken(resource, filter_key, entry.request_id)

    def resolve(self, token: RequestToken, data: Any) -> bool:
        """Store a successful result. Returns False if the request was superseded."""
        with self._lock:
            entry = self._current_entry(token)
            if entry is None:
                return False
            entry.status = FetchStatus.SUCCESS
            entry.data = data
            entry.error = None
            self._store(entry)
            return True

    def fail(self, token: RequestToken, error: BaseException | str) -> bool:
        """Record a failed fetch. Returns False if the request was superseded."""
        with self._lock:
            entry = self._current_entry(token)
            if entry is None:
                return False
            entry.status = FetchStatus.ERROR
            entry.data = None
            entry.error = str(error)
            self._store(entry)
            return True

    def fetch(
        self,
        resource: str,
        filter_key: Hashable,
        loader: Callable[[], T],
        force: bool = False,
    ) -> T:
        """Return cached data if present, otherwise load and store it.

        Loader exceptions are recorded on the entry and re-raised.
        """
        if not force:
            entry = self.get(resource, filter_key)
            if entry is not None and entry.status == FetchStatus.SUCCESS:
                logger.debug("Cache hit: %s/%s", resource, filter_key)
                return entry.data

        token = self.begin(resource, filter_key)
        try:
            data = loader()
        except Exception as exc:
            self.fail(token, exc)
            raise

        if not self.resolve(token, data):
            logger.info(
                "Discarded superseded %s result for %s (request %d)",
                resource, filter_key, token.request_id,
            )
        return data

    def invalidate(self, resource: str, filter_key: Any = ANY) -> int:
        """Drop entries for a resource, or for one of its filter keys.

        Returns the number of entries removed. A fetch still in flight for
        a dropped entry can no longer store its result.
        """
        with self._lock:
            if filter_key is ANY:
                keys = [k for k in list(self._entries.keys()) if k[0] == resource]
            else:
                keys = [(resource, filter_key)] if (resource, filter_key) in self._entries else []
            for key in keys:
                self._entries.pop(key, None)
        if keys:
            logger.debug("Invalidated %d %s cache entr%s", len(keys), resource, "y" if len(keys) == 1 else "ies")
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    def _store(self, entry: CacheEntry) -> None:
        # Re-assigning restarts the entry's TTL from this resolve/fail.
        entry.updated_at = self._timer()
        self._entries[(entry.resource, entry.filter_key)] = entry

    def _current_entry(self, token: RequestToken) -> CacheEntry | None:
        entry = self._entries.get((token.resource, token.filter_key))
        if entry is None or entry.request_id != token.request_id:
            return None
        return entry
