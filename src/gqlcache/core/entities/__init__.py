"""Domain entities for gqlcache."""

from gqlcache.core.entities.cache_config import (
    CacheKeyConfig,
    KeyStrategy,
    PluginConfig,
    RawRequestKeyConfig,
    StoreBackend,
)
from gqlcache.core.entities.cache_entry import CacheEntry
from gqlcache.core.entities.decision import Decision, DecisionAction, Visibility
from gqlcache.core.entities.plugin_request import (
    PreParseRequest,
    PreResponseRequest,
    RawRequest,
    Session,
)

__all__ = [
    "CacheEntry",
    "CacheKeyConfig",
    "RawRequestKeyConfig",
    "KeyStrategy",
    "StoreBackend",
    "PluginConfig",
    "Decision",
    "DecisionAction",
    "Visibility",
    "PreParseRequest",
    "PreResponseRequest",
    "RawRequest",
    "Session",
]
