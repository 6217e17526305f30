"""Redis cache store implementation."""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from gqlcache.core.exceptions import StoreUnavailableError
from gqlcache.utils.hashing import hash_value

logger = logging.getLogger(__name__)


class RedisCacheStore:
    """Redis cache store for distributed deployments.

    Entries are written with a native Redis expiry, so validity is
    enforced by the server. Cache keys are hashed before use, which keeps
    Redis keys short however large the canonical key document is.

    The client's connection pool is safe for concurrent use by many
    coroutines, and its connect/socket timeouts bound every call.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "gqlcache",
        socket_timeout: float | None = 5.0,
        client: redis.Redis | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_url: Redis connection URL.
            key_prefix: Prefix for all cache keys.
            socket_timeout: Connect and read timeout in seconds.
            client: Pre-built client to use instead of connecting to
                ``redis_url``.
        """
        if client is None:
            client = redis.from_url(
                redis_url,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
            )
        self._redis: redis.Redis = client
        self._key_prefix = key_prefix

    async def exists(self, key: str) -> bool:
        """Check if a valid entry exists for key.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists and has not expired.
        """
        try:
            result = await self._redis.exists(self._prefixed_key(key))
        except RedisError as e:
            raise self._unavailable("exists", e) from e
        return result > 0

    async def read(self, key: str) -> bytes | None:
        """Retrieve the payload stored for key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The payload, or None if not found or expired.
        """
        try:
            return await self._redis.get(self._prefixed_key(key))
        except RedisError as e:
            raise self._unavailable("read", e) from e

    async def write(self, key: str, payload: bytes, ttl_seconds: int) -> None:
        """Store payload for ttl_seconds, replacing any previous entry.

        Args:
            key: The cache key.
            payload: The serialized payload.
            ttl_seconds: Seconds until the entry expires.
        """
        try:
            await self._redis.set(self._prefixed_key(key), payload, ex=ttl_seconds)
        except RedisError as e:
            raise self._unavailable("write", e) from e

    async def delete(self, key: str) -> None:
        """Remove the entry for key, if any.

        Args:
            key: The cache key to delete.
        """
        try:
            await self._redis.delete(self._prefixed_key(key))
        except RedisError as e:
            raise self._unavailable("delete", e) from e

    async def ping(self) -> bool:
        """Check that Redis answers.

        Returns:
            True if Redis replied to PING, False otherwise.
        """
        try:
            return bool(await self._redis.ping())
        except RedisError:
            logger.warning("Redis ping failed", exc_info=True)
            return False

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    def _prefixed_key(self, key: str) -> str:
        """Map a cache key to the Redis key that holds it.

        Args:
            key: The cache key.

        Returns:
            The prefixed hash of the key.
        """
        return f"{self._key_prefix}:{hash_value(key)}"

    def _unavailable(self, operation: str, error: RedisError) -> StoreUnavailableError:
        logger.error("Redis %s failed: %s", operation, error)
        return StoreUnavailableError(f"cache store {operation} failed")

    async def __aenter__(self) -> "RedisCacheStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
