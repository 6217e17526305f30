"""Pytest configuration for gqlcache tests."""

import pytest

from gqlcache import (
    CacheDecisionService,
    InMemoryCacheStore,
    PluginConfig,
)
from gqlcache.adapters.fastapi import build_service

SECRET = "test-secret"


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(maxsize=100, timer=clock)


@pytest.fixture
def config() -> PluginConfig:
    return PluginConfig(secret=SECRET, default_ttl=600)


@pytest.fixture
def service(store: InMemoryCacheStore, config: PluginConfig) -> CacheDecisionService:
    return build_service(config, store)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"hasura-m-auth": SECRET}
