"""FastAPI application exposing the plugin hooks."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse, Response

from gqlcache.config import load_config
from gqlcache.core.entities.cache_config import PluginConfig
from gqlcache.core.entities.decision import Decision
from gqlcache.core.interfaces.cache_store import ICacheStore
from gqlcache.core.services.decision_service import CacheDecisionService
from gqlcache.core.services.directive_policy import DirectivePolicy
from gqlcache.infrastructure.backends import create_store
from gqlcache.infrastructure.key_builders.default import ConfiguredKeyBuilder
from gqlcache.infrastructure.serializers.json import JsonSerializer

logger = logging.getLogger(__name__)


def build_service(config: PluginConfig, store: ICacheStore) -> CacheDecisionService:
    """Wire a decision service from configuration.

    Args:
        config: The plugin configuration.
        store: The cache store to share between requests.

    Returns:
        A ready decision service.
    """
    policy = DirectivePolicy(default_ttl=config.default_ttl)
    return CacheDecisionService(
        store=store,
        key_builder=ConfiguredKeyBuilder(
            key_config=config.cache_key,
            strategy=config.key_strategy,
            policy=policy,
        ),
        serializer=JsonSerializer(),
        config=config,
        policy=policy,
    )


def create_app(
    config: PluginConfig | None = None,
    store: ICacheStore | None = None,
) -> FastAPI:
    """Create the plugin's ASGI application.

    Args:
        config: The plugin configuration. Loaded from the environment if
            not provided.
        store: The cache store. Created from the configuration if not
            provided.

    Returns:
        The FastAPI application.
    """
    if config is None:
        config = load_config()
    if store is None:
        store = create_store(config)
    service = build_service(config, store)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Caching plugin starting (backend=%s, strategy=%s, default_ttl=%ds)",
            config.backend.value,
            config.key_strategy.value,
            config.default_ttl,
        )
        yield
        logger.info("Closing cache store")
        await store.close()

    app = FastAPI(
        title="gqlcache",
        description="Response caching plugin for a GraphQL engine",
        lifespan=lifespan,
    )
    app.state.decision_service = service

    @app.post("/pre-parse")
    async def pre_parse(request: Request) -> Response:
        decision = await service.pre_parse(request.headers, await _read_body(request))
        return _render(decision)

    @app.post("/pre-response")
    async def pre_response(request: Request) -> Response:
        decision = await service.pre_response(request.headers, await _read_body(request))
        return _render(decision)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        store_status = "healthy" if await store.ping() else "unhealthy"
        return {"status": "healthy", "store": store_status}

    @app.get("/cache/stats")
    async def cache_stats() -> dict[str, Any]:
        return {
            "stats": service.stats,
            "config": {
                "backend": config.backend.value,
                "key_strategy": config.key_strategy.value,
                "default_ttl": config.default_ttl,
            },
        }

    return app


async def _read_body(request: Request) -> Any:
    # Undecodable bodies are passed on as None and rejected by validation
    try:
        return json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _render(decision: Decision) -> Response:
    if decision.body is None:
        return Response(status_code=decision.status)
    return JSONResponse(decision.body, status_code=decision.status)
