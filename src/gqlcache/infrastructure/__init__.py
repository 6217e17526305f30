"""Infrastructure layer implementations for gqlcache."""

from gqlcache.infrastructure.backends import (
    InMemoryCacheStore,
    RedisCacheStore,
    create_store,
)
from gqlcache.infrastructure.key_builders import ConfiguredKeyBuilder
from gqlcache.infrastructure.serializers import JsonSerializer

__all__ = [
    "InMemoryCacheStore",
    "RedisCacheStore",
    "create_store",
    "ConfiguredKeyBuilder",
    "JsonSerializer",
]
