"""gqlcache - Response caching plugin for GraphQL engines.

A small service the engine calls at two points of every query:

* ``POST /pre-parse`` answers with a cached response, or tells the
  engine to carry on (204).
* ``POST /pre-response`` stores the engine's response when the query is
  cacheable.

Every query is cached unless it opts out with ``@nocache``. When the
configuration lists queries to cache, only those and queries carrying
``@cached`` are. Directives set the TTL or force a refresh:

    query Artists @cached(ttl: 120) { artist { name } }
    query Artists @cached(refresh: true) { artist { name } }
    query Artists @nocache { artist { name } }

Running the plugin:

    GQLCACHE_SECRET=s3cret GQLCACHE_BACKEND=redis \\
    GQLCACHE_REDIS_URL=redis://redis:6379 python -m gqlcache

Embedding it:

    from gqlcache import InMemoryCacheStore, PluginConfig
    from gqlcache.adapters.fastapi import create_app

    app = create_app(
        PluginConfig(secret="s3cret", default_ttl=600),
        store=InMemoryCacheStore(),
    )
"""

from gqlcache.core.entities import (
    CacheEntry,
    CacheKeyConfig,
    Decision,
    DecisionAction,
    KeyStrategy,
    PluginConfig,
    RawRequestKeyConfig,
    StoreBackend,
    Visibility,
)
from gqlcache.core.exceptions import (
    AuthError,
    ConfigurationError,
    GqlCacheError,
    MissingHeaderError,
    QueryParseError,
    RequestValidationError,
    SerializationError,
    StoreUnavailableError,
)
from gqlcache.core.interfaces import ICacheStore, IKeyBuilder, ISerializer
from gqlcache.core.services import (
    CacheDecisionService,
    DirectivePolicy,
    normalize,
    strip_locations,
)
from gqlcache.infrastructure import (
    ConfiguredKeyBuilder,
    InMemoryCacheStore,
    JsonSerializer,
    RedisCacheStore,
    create_store,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheEntry",
    "CacheKeyConfig",
    "RawRequestKeyConfig",
    "KeyStrategy",
    "StoreBackend",
    "PluginConfig",
    "Decision",
    "DecisionAction",
    "Visibility",
    # Errors
    "GqlCacheError",
    "AuthError",
    "RequestValidationError",
    "QueryParseError",
    "MissingHeaderError",
    "StoreUnavailableError",
    "SerializationError",
    "ConfigurationError",
    # Core interfaces
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    # Core services
    "CacheDecisionService",
    "DirectivePolicy",
    "normalize",
    "strip_locations",
    # Infrastructure implementations
    "InMemoryCacheStore",
    "RedisCacheStore",
    "create_store",
    "ConfiguredKeyBuilder",
    "JsonSerializer",
]
