"""Cache store implementations."""

from gqlcache.core.entities.cache_config import PluginConfig, StoreBackend
from gqlcache.core.interfaces.cache_store import ICacheStore
from gqlcache.infrastructure.backends.memory import InMemoryCacheStore
from gqlcache.infrastructure.backends.redis import RedisCacheStore


def create_store(config: PluginConfig) -> ICacheStore:
    """Create the cache store selected by the configuration.

    Args:
        config: The plugin configuration.

    Returns:
        A store ready to be shared by all requests.
    """
    if config.backend is StoreBackend.REDIS:
        return RedisCacheStore(
            redis_url=config.redis_url,
            key_prefix=config.key_prefix,
            socket_timeout=config.store_timeout,
        )
    return InMemoryCacheStore(maxsize=config.max_entries)


__all__ = [
    "InMemoryCacheStore",
    "RedisCacheStore",
    "create_store",
]
