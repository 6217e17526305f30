"""Per-query caching directive entities.

Clients control caching from inside the query document with directives on
the operation:

    query Artists @cached(ttl: 120) { artist { name } }
    query Artists @cached(refresh: true) { artist { name } }
    query Artists @nocache { artist { name } }
"""

from dataclasses import dataclass

CACHED_DIRECTIVE = "cached"
NOCACHE_DIRECTIVE = "nocache"
LEGACY_CACHE_DIRECTIVE = "cache"

# Directives that steer caching rather than describe the query
CONTROL_DIRECTIVES = frozenset({CACHED_DIRECTIVE, NOCACHE_DIRECTIVE})


@dataclass(frozen=True)
class CachingRequest:
    """Parsed arguments of an ``@cached`` directive.

    Attributes:
        ttl: Seconds the response should stay cached.
        refresh: Whether to drop any existing entry before executing.
    """

    ttl: int
    refresh: bool = False
