"""Tests for start-up configuration loading."""

import json
import os
from pathlib import Path

import pytest

from gqlcache.config import GqlCacheSettings, load_config, read_config_file
from gqlcache.core.entities.cache_config import (
    CacheKeyConfig,
    KeyStrategy,
    RawRequestKeyConfig,
    StoreBackend,
)
from gqlcache.core.exceptions import ConfigurationError


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Start from an environment without any GQLCACHE_ variables."""
    for name in list(os.environ):
        if name.upper().startswith("GQLCACHE_"):
            monkeypatch.delenv(name)
    return monkeypatch


class TestLoadConfigFromEnvironment:
    """Tests for environment-only configuration."""

    def test_defaults(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("GQLCACHE_SECRET", "s3cret")

        config = load_config()

        assert config.secret == "s3cret"
        assert config.default_ttl == 600
        assert config.cache_key is None
        assert config.key_strategy is KeyStrategy.CONFIGURED
        assert config.backend is StoreBackend.MEMORY
        assert config.queries_to_cache == ()

    def test_missing_secret(self, env: pytest.MonkeyPatch) -> None:
        with pytest.raises(ConfigurationError, match="secret"):
            load_config()

    def test_empty_values_are_ignored(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("GQLCACHE_SECRET", "s")
        env.setenv("GQLCACHE_DEFAULT_TTL", "")

        assert load_config().default_ttl == 600

    def test_typed_values(self, env: pytest.MonkeyPatch) -> None:
        for name, value in {
            "GQLCACHE_SECRET": "s",
            "GQLCACHE_DEFAULT_TTL": "30",
            "GQLCACHE_BACKEND": "REDIS",
            "GQLCACHE_REDIS_URL": "redis://cache:6379/1",
            "GQLCACHE_KEY_PREFIX": "app",
            "GQLCACHE_MAX_ENTRIES": "50",
            "GQLCACHE_STORE_TIMEOUT": "0.5",
            "GQLCACHE_KEY_STRATEGY": "directive_filtered",
        }.items():
            env.setenv(name, value)

        config = load_config()

        assert config.default_ttl == 30
        assert config.backend is StoreBackend.REDIS
        assert config.redis_url == "redis://cache:6379/1"
        assert config.key_prefix == "app"
        assert config.max_entries == 50
        assert config.store_timeout == 0.5
        assert config.key_strategy is KeyStrategy.DIRECTIVE_FILTERED

    def test_json_values(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("GQLCACHE_SECRET", "s")
        env.setenv(
            "GQLCACHE_CACHE_KEY", '{"rawRequest": {"query": true}, "headers": ["X-Id"]}'
        )
        env.setenv("GQLCACHE_QUERIES_TO_CACHE", '["{ a }", "{ b }"]')

        config = load_config()

        assert config.cache_key == CacheKeyConfig(
            raw_request=RawRequestKeyConfig(query=True), headers=("X-Id",)
        )
        assert config.queries_to_cache == ("{ a }", "{ b }")

    def test_invalid_json_value(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("GQLCACHE_SECRET", "s")
        env.setenv("GQLCACHE_CACHE_KEY", "{rawRequest")

        with pytest.raises(ConfigurationError, match="cache_key"):
            load_config()

    def test_bad_cache_key_shape(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("GQLCACHE_SECRET", "s")
        env.setenv("GQLCACHE_CACHE_KEY", '{"session": "yes"}')

        with pytest.raises(ConfigurationError, match="session"):
            load_config()

    @pytest.mark.parametrize(
        ("variable", "value"),
        [
            ("GQLCACHE_DEFAULT_TTL", "ten"),
            ("GQLCACHE_DEFAULT_TTL", "0"),
            ("GQLCACHE_DEFAULT_TTL", "-5"),
            ("GQLCACHE_MAX_ENTRIES", "0"),
            ("GQLCACHE_STORE_TIMEOUT", "soon"),
            ("GQLCACHE_BACKEND", "memcached"),
            ("GQLCACHE_KEY_STRATEGY", "random"),
            ("GQLCACHE_QUERIES_TO_CACHE", '"{ a }"'),
        ],
    )
    def test_invalid_values(
        self, env: pytest.MonkeyPatch, variable: str, value: str
    ) -> None:
        env.setenv("GQLCACHE_SECRET", "s")
        env.setenv(variable, value)

        with pytest.raises(ConfigurationError):
            load_config()


class TestLoadConfigFromFile:
    """Tests for configuration read from a JSON file."""

    def _write(self, tmp_path: Path, data: object) -> str:
        path = tmp_path / "gqlcache.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    def test_file_values(self, env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            {
                "secret": "from-file",
                "timeToLive": 120,
                "cacheKey": {"session": True},
                "queriesToCache": ["query { Artist { Name } }"],
            },
        )
        env.setenv("GQLCACHE_CONFIG_FILE", path)

        config = load_config()

        assert config.secret == "from-file"
        assert config.default_ttl == 120
        assert config.cache_key == CacheKeyConfig(session=True)
        assert config.queries_to_cache == ("query { Artist { Name } }",)

    def test_environment_overrides_file(
        self, env: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        path = self._write(tmp_path, {"secret": "from-file", "defaultTtl": 120})
        env.setenv("GQLCACHE_CONFIG_FILE", path)
        env.setenv("GQLCACHE_DEFAULT_TTL", "5")

        config = load_config()

        assert config.secret == "from-file"
        assert config.default_ttl == 5

    def test_invalid_file_value(self, env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = self._write(tmp_path, {"secret": "s", "maxEntries": "lots"})
        env.setenv("GQLCACHE_CONFIG_FILE", path)

        with pytest.raises(ConfigurationError, match="max_entries"):
            load_config()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="cannot read"):
            read_config_file(tmp_path / "absent.json")

    def test_invalid_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{secret:", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="not valid JSON"):
            read_config_file(path)

    def test_file_must_hold_object(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="JSON object"):
            read_config_file(Path(self._write(tmp_path, ["secret"])))

    def test_unknown_keys_are_ignored(self, tmp_path: Path) -> None:
        path = Path(self._write(tmp_path, {"secret": "s", "colour": "blue"}))

        assert read_config_file(path) == {"secret": "s"}


class TestGqlCacheSettings:
    """Tests for the settings model."""

    def test_choices_are_case_insensitive(self, env: pytest.MonkeyPatch) -> None:
        settings = GqlCacheSettings(backend="Redis", key_strategy="CONFIGURED")

        assert settings.backend is StoreBackend.REDIS
        assert settings.key_strategy is KeyStrategy.CONFIGURED
