"""Core domain layer for gqlcache."""

from gqlcache.core.entities import (
    CacheEntry,
    CacheKeyConfig,
    Decision,
    DecisionAction,
    PluginConfig,
)
from gqlcache.core.interfaces import ICacheStore, IKeyBuilder, ISerializer
from gqlcache.core.services import CacheDecisionService, DirectivePolicy

__all__ = [
    # Entities
    "CacheEntry",
    "CacheKeyConfig",
    "Decision",
    "DecisionAction",
    "PluginConfig",
    # Interfaces
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    # Services
    "CacheDecisionService",
    "DirectivePolicy",
]
