"""Core interfaces (Protocol classes) for gqlcache."""

from gqlcache.core.interfaces.cache_store import ICacheStore
from gqlcache.core.interfaces.key_builder import IKeyBuilder
from gqlcache.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
]
