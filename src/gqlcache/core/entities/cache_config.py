"""Cache configuration entities."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gqlcache.core.exceptions import ConfigurationError

DEFAULT_TTL = 600


class KeyStrategy(Enum):
    """How a cache key is derived from a request.

    CONFIGURED: compose the key from the components enabled in
        ``CacheKeyConfig``.
    DIRECTIVE_FILTERED: legacy keying on the first definition with its
        directives filtered down to ``@cache``.
    """

    CONFIGURED = "configured"
    DIRECTIVE_FILTERED = "directive_filtered"


class StoreBackend(Enum):
    """Available cache store implementations."""

    MEMORY = "memory"
    REDIS = "redis"


@dataclass(frozen=True)
class RawRequestKeyConfig:
    """Which raw-request fields contribute to the cache key."""

    query: bool = False
    operation_name: bool = False
    variables: bool = False


@dataclass(frozen=True)
class CacheKeyConfig:
    """Declarative selection of the request components that form a cache key.

    Absent components are excluded from the key, never defaulted to included.
    """

    raw_request: RawRequestKeyConfig = field(default_factory=RawRequestKeyConfig)
    session: bool = False
    headers: tuple[str, ...] = ()

    @classmethod
    def default(cls) -> "CacheKeyConfig":
        """Key made of the query, variables and session."""
        return cls(
            raw_request=RawRequestKeyConfig(query=True, variables=True),
            session=True,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CacheKeyConfig":
        """Build a configuration from a JSON-style mapping.

        Accepts both the camelCase keys used by the engine's plugin
        configuration (``rawRequest``, ``operationName``) and snake_case.

        Args:
            data: The mapping to read.

        Returns:
            A new CacheKeyConfig instance.

        Raises:
            ConfigurationError: If a value has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("cache key configuration must be an object")

        raw = data.get("rawRequest", data.get("raw_request")) or {}
        if not isinstance(raw, Mapping):
            raise ConfigurationError("rawRequest must be an object")

        headers = data.get("headers") or ()
        if isinstance(headers, str) or not isinstance(headers, Iterable):
            raise ConfigurationError("headers must be a list of header names")

        return cls(
            raw_request=RawRequestKeyConfig(
                query=_flag(raw, "query"),
                operation_name=_flag(raw, "operationName", "operation_name"),
                variables=_flag(raw, "variables"),
            ),
            session=_flag(data, "session"),
            headers=_unique(str(header) for header in headers),
        )


@dataclass(frozen=True)
class PluginConfig:
    """Process-wide configuration, built once at start-up.

    Attributes:
        secret: Shared secret expected in the ``hasura-m-auth`` header.
        default_ttl: TTL in seconds when a query does not override it.
        cache_key: Components of the cache key. None selects the default
            composition (query, variables and session).
        key_strategy: Which key derivation to use.
        queries_to_cache: Query texts cacheable without a ``@cached``
            directive.
        backend: Which cache store to use.
        redis_url: Connection URL for the Redis store.
        key_prefix: Prefix applied to every key in the Redis store.
        max_entries: Upper bound on the process-local store.
        store_timeout: Connect and socket timeout for the Redis store.
    """

    secret: str
    default_ttl: int = DEFAULT_TTL
    cache_key: CacheKeyConfig | None = None
    key_strategy: KeyStrategy = KeyStrategy.CONFIGURED
    queries_to_cache: tuple[str, ...] = ()
    backend: StoreBackend = StoreBackend.MEMORY
    redis_url: str = "redis://localhost:6379"
    key_prefix: str = "gqlcache"
    max_entries: int = 10000
    store_timeout: float = 5.0

    def __post_init__(self) -> None:
        """Validate invariants that the rest of the system relies on."""
        if not self.secret:
            raise ConfigurationError("a shared secret must be configured")
        if self.default_ttl <= 0:
            raise ConfigurationError("default_ttl must be a positive number of seconds")
        if self.max_entries <= 0:
            raise ConfigurationError("max_entries must be positive")


def _flag(data: Mapping[str, Any], *names: str) -> bool:
    for name in names:
        if name in data:
            value = data[name]
            if not isinstance(value, bool):
                raise ConfigurationError(f"'{name}' must be true or false")
            return value
    return False


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    # Header names are case-insensitive; keep first spelling and order
    seen: set[str] = set()
    result = []
    for name in names:
        if name.lower() not in seen:
            seen.add(name.lower())
            result.append(name)
    return tuple(result)
