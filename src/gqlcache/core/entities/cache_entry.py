"""Cache entry entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Holds a serialized payload and the absolute time at which it stops
    being valid. Time is measured on the clock of the store that created
    the entry. An expired entry may still be physically present; it must
    be treated as absent.
    """

    key: str
    value: bytes
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired.

        Args:
            now: Current time on the store's clock.

        Returns:
            True once ``now`` is strictly past the expiry time.
        """
        return now > self.expires_at

    @classmethod
    def create(cls, key: str, value: bytes, ttl: float, now: float) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The cache key.
            value: The serialized payload.
            ttl: Time-to-live in seconds.
            now: Current time on the store's clock.

        Returns:
            A new CacheEntry instance.
        """
        return cls(key=key, value=value, expires_at=now + ttl)
