"""Cache store interface."""

from typing import Protocol


class ICacheStore(Protocol):
    """Contract for TTL-aware cache stores.

    All stores must implement this protocol to be used with
    CacheDecisionService. Methods are async to support both in-memory
    and remote stores. A single instance is shared by every request,
    so implementations must be safe for concurrent use.

    Backend failures are raised as StoreUnavailableError; a missing or
    expired key is never an error.
    """

    async def exists(self, key: str) -> bool:
        """Check if a valid entry exists for key.

        Args:
            key: The cache key to check.

        Returns:
            True if an entry is present and has not expired.
        """
        ...

    async def read(self, key: str) -> bytes | None:
        """Retrieve the payload stored for key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The payload, or None if not found or expired.
        """
        ...

    async def write(self, key: str, payload: bytes, ttl_seconds: int) -> None:
        """Store payload for ttl_seconds, replacing any previous entry.

        Args:
            key: The cache key.
            payload: The serialized payload.
            ttl_seconds: Seconds until the entry expires.
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove the entry for key, if any.

        Args:
            key: The cache key to delete.
        """
        ...

    async def ping(self) -> bool:
        """Check that the backend is reachable.

        Returns:
            True if the backend answered.
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
