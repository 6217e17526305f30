"""Start-up configuration loading.

Configuration is read once, when the process starts, from ``GQLCACHE_*``
environment variables and an optional JSON file named by
``GQLCACHE_CONFIG_FILE``. Environment variables take precedence over the
file. The result is an immutable ``PluginConfig`` that is passed to
everything that needs it.

Example file::

    {
      "secret": "zZkhKqFjqXR4g5MZCsJUZCnhCcoPyZ",
      "defaultTtl": 600,
      "cacheKey": {
        "rawRequest": {"query": true, "variables": true},
        "session": true,
        "headers": ["X-Hasura-Unique-Cache-Key"]
      },
      "queriesToCache": ["query { Artist { Name } }"],
      "backend": "redis",
      "redisUrl": "redis://redis:6379"
    }
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from gqlcache.core.entities.cache_config import (
    DEFAULT_TTL,
    CacheKeyConfig,
    KeyStrategy,
    PluginConfig,
    StoreBackend,
)
from gqlcache.core.exceptions import ConfigurationError

ENV_PREFIX = "GQLCACHE_"
CONFIG_FILE_ENV = f"{ENV_PREFIX}CONFIG_FILE"

# Keys accepted in the config file for each setting
FILE_KEYS: dict[str, tuple[str, ...]] = {
    "secret": ("secret",),
    "default_ttl": ("defaultTtl", "default_ttl", "timeToLive"),
    "cache_key": ("cacheKey", "cache_key"),
    "key_strategy": ("keyStrategy", "key_strategy"),
    "queries_to_cache": ("queriesToCache", "queries_to_cache"),
    "backend": ("backend",),
    "redis_url": ("redisUrl", "redis_url"),
    "key_prefix": ("keyPrefix", "key_prefix"),
    "max_entries": ("maxEntries", "max_entries"),
    "store_timeout": ("storeTimeout", "store_timeout"),
}


class GqlCacheSettings(BaseSettings):
    """Plugin settings as read from the environment and config file."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    secret: str = ""
    default_ttl: int = Field(default=DEFAULT_TTL, gt=0)
    cache_key: dict[str, Any] | None = None
    key_strategy: KeyStrategy = KeyStrategy.CONFIGURED
    queries_to_cache: list[str] = Field(default_factory=list)
    backend: StoreBackend = StoreBackend.MEMORY
    redis_url: str = "redis://localhost:6379"
    key_prefix: str = "gqlcache"
    max_entries: int = Field(default=10000, gt=0)
    store_timeout: float = Field(default=5.0, gt=0)

    @field_validator("key_strategy", "backend", mode="before")
    @classmethod
    def lower_case_choice(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment first: it overrides file values passed as init kwargs
        return (env_settings, init_settings)

    def to_plugin_config(self) -> PluginConfig:
        """Build the immutable plugin configuration.

        Raises:
            ConfigurationError: If a value is missing or invalid.
        """
        cache_key = None
        if self.cache_key is not None:
            cache_key = CacheKeyConfig.from_mapping(self.cache_key)
        return PluginConfig(
            secret=self.secret,
            default_ttl=self.default_ttl,
            cache_key=cache_key,
            key_strategy=self.key_strategy,
            queries_to_cache=tuple(self.queries_to_cache),
            backend=self.backend,
            redis_url=self.redis_url,
            key_prefix=self.key_prefix,
            max_entries=self.max_entries,
            store_timeout=self.store_timeout,
        )


def load_config() -> PluginConfig:
    """Load the plugin configuration.

    Returns:
        The immutable plugin configuration.

    Raises:
        ConfigurationError: If a value is missing or invalid.
    """
    config_file = os.environ.get(CONFIG_FILE_ENV)
    file_values = read_config_file(Path(config_file)) if config_file else {}

    try:
        settings = GqlCacheSettings(**file_values)
    except SettingsError as e:
        raise ConfigurationError(str(e)) from e
    except ValidationError as e:
        raise ConfigurationError(_describe(e)) from e
    return settings.to_plugin_config()


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a JSON config file into settings keyed by field name.

    Args:
        path: The file to read.

    Returns:
        The settings present in the file.

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON
            object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {path} must contain a JSON object")

    values = {}
    for name, file_keys in FILE_KEYS.items():
        for file_key in file_keys:
            if file_key in data:
                values[name] = data[file_key]
                break
    return values


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"invalid setting {location}: {first['msg']}"
