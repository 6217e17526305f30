"""In-memory cache store implementation."""

import threading
import time
from collections.abc import Callable

from cachetools import LRUCache  # type: ignore[import-untyped]

from gqlcache.core.entities.cache_entry import CacheEntry


class InMemoryCacheStore:
    """In-memory cache store with per-entry expiry.

    Suitable for single-process deployments. Entries live in a bounded
    cachetools LRU map and carry their own absolute expiry, which is
    checked on every access: an expired entry is reported absent even
    before it is purged.
    """

    def __init__(
        self,
        maxsize: int = 10000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache store.

        Args:
            maxsize: Maximum number of entries kept.
            timer: Clock used for expiry, in seconds.
        """
        self._maxsize = maxsize
        self._timer = timer
        self._cache: LRUCache[str, CacheEntry] = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()

    async def exists(self, key: str) -> bool:
        """Check if a valid entry exists for key.

        Args:
            key: The cache key to check.

        Returns:
            True if an entry is present and has not expired.
        """
        return self._valid_entry(key) is not None

    async def read(self, key: str) -> bytes | None:
        """Retrieve the payload stored for key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The payload, or None if not found or expired.
        """
        entry = self._valid_entry(key)
        return entry.value if entry is not None else None

    async def write(self, key: str, payload: bytes, ttl_seconds: int) -> None:
        """Store payload for ttl_seconds, replacing any previous entry.

        Args:
            key: The cache key.
            payload: The serialized payload.
            ttl_seconds: Seconds until the entry expires.
        """
        entry = CacheEntry.create(key, payload, ttl_seconds, self._timer())
        with self._lock:
            self._cache[key] = entry

    async def delete(self, key: str) -> None:
        """Remove the entry for key, if any.

        Args:
            key: The cache key to delete.
        """
        with self._lock:
            self._cache.pop(key, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        with self._lock:
            self._cache.clear()

    def _valid_entry(self, key: str) -> CacheEntry | None:
        with self._lock:
            entry = self._cache.get(key)
        if entry is None or entry.is_expired(self._timer()):
            return None
        return entry

    def __len__(self) -> int:
        """Return the number of entries held, expired or not."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize
