"""Decision service - orchestrates the cache decision for each hook call.

The engine calls the plugin twice per query:

* pre-parse: before the query is parsed; a cached response can be
  returned instead of executing the query.
* pre-response: after the response is produced; it may be stored.

Each call runs once through auth check, validation, policy check and at
most one store operation, and always ends in a single ``Decision``.
"""

import hmac
import logging
from collections.abc import Mapping
from typing import Any

from gqlcache.core.entities.cache_config import PluginConfig
from gqlcache.core.entities.cache_directive import CachingRequest
from gqlcache.core.entities.decision import Decision
from gqlcache.core.entities.plugin_request import PreParseRequest, PreResponseRequest
from gqlcache.core.exceptions import AuthError, GqlCacheError
from gqlcache.core.interfaces.cache_store import ICacheStore
from gqlcache.core.interfaces.key_builder import IKeyBuilder
from gqlcache.core.interfaces.serializer import ISerializer
from gqlcache.core.services.directive_policy import DirectivePolicy
from gqlcache.core.services.normalizer import normalize
from gqlcache.utils.hashing import canonical_json

logger = logging.getLogger(__name__)

AUTH_HEADER = "hasura-m-auth"
PRE_PARSE = "pre-parse"
PRE_RESPONSE = "pre-response"


class CacheDecisionService:
    """Domain service that decides what to do with each hook call.

    This is the main entry point of the plugin, composing the cache
    store, key builder, serializer and directive policy. One instance is
    shared by all concurrent requests; it holds no per-request state.

    Concurrent pre-response calls for the same key may both find the key
    absent and both write. The last write wins; every writer stores a
    response the engine computed itself, so only the hit rate is affected.
    """

    def __init__(
        self,
        store: ICacheStore,
        key_builder: IKeyBuilder,
        serializer: ISerializer,
        config: PluginConfig,
        policy: DirectivePolicy | None = None,
    ) -> None:
        """Initialize the decision service.

        Args:
            store: The cache store shared by all requests.
            key_builder: The key builder for generating cache keys.
            serializer: The serializer for encoding/decoding responses.
            config: The plugin configuration.
            policy: Directive policy. Built from the configured default
                TTL if not provided.

        Raises:
            QueryParseError: If a configured query-to-cache is invalid.
        """
        self._store = store
        self._key_builder = key_builder
        self._serializer = serializer
        self._config = config
        self._policy = policy or DirectivePolicy(default_ttl=config.default_ttl)
        self._queries_to_cache = frozenset(
            canonical_json(normalize(query)) for query in config.queries_to_cache
        )

        # Statistics
        self._hits = 0
        self._misses = 0
        self._writes = 0

    @property
    def config(self) -> PluginConfig:
        """Get the plugin configuration."""
        return self._config

    @property
    def store(self) -> ICacheStore:
        return self._store

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, writes and total lookups.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "writes": self._writes,
            "total": self._hits + self._misses,
        }

    async def pre_parse(self, headers: Mapping[str, str], body: Any) -> Decision:
        """Decide whether a query can be answered from the cache.

        Args:
            headers: HTTP headers of the hook call.
            body: Decoded JSON body of the hook call.

        Returns:
            CONTINUE when the engine should execute the query, RESPOND
            with the cached body on a hit, or REJECT on error.
        """
        try:
            self._check_auth(headers)
            request = PreParseRequest.from_body(body)
            decision = await self._decide_pre_parse(request, headers)
        except GqlCacheError as e:
            decision = self._error_decision(PRE_PARSE, e)
        return self._log_decision(PRE_PARSE, decision)

    async def pre_response(self, headers: Mapping[str, str], body: Any) -> Decision:
        """Store a response if its query is cacheable.

        Args:
            headers: HTTP headers of the hook call.
            body: Decoded JSON body of the hook call.

        Returns:
            RESPOND with the engine's response, or REJECT on error.
        """
        try:
            self._check_auth(headers)
            request = PreResponseRequest.from_body(body)
            decision = await self._decide_pre_response(request, headers)
        except GqlCacheError as e:
            decision = self._error_decision(PRE_RESPONSE, e)
        return self._log_decision(PRE_RESPONSE, decision)

    async def _decide_pre_parse(
        self,
        request: PreParseRequest,
        headers: Mapping[str, str],
    ) -> Decision:
        document = normalize(request.raw_request.query)
        if self._policy.is_caching_disabled(document):
            return Decision.proceed("user requested to skip caching")

        key = self._key_builder.build(request, headers, document=document)
        caching = self._policy.caching_request(document)
        if caching is not None and caching.refresh:
            await self._store.delete(key)
            return Decision.proceed("user deliberately wiped the cache")

        if not self._is_cacheable(document, caching):
            return Decision.proceed("query not listed as cacheable")

        payload = await self._store.read(key)
        if payload is None:
            self._misses += 1
            return Decision.proceed("found cacheable query with no current entry")

        cached = self._serializer.deserialize(payload)
        self._hits += 1
        return Decision.respond(cached, "found query response in cache")

    async def _decide_pre_response(
        self,
        request: PreResponseRequest,
        headers: Mapping[str, str],
    ) -> Decision:
        document = normalize(request.raw_request.query)
        response = request.response
        if self._policy.is_caching_disabled(document):
            return Decision.respond(response, "user requested to skip caching")

        key = self._key_builder.build(request, headers, document=document)
        caching = self._policy.caching_request(document)
        if not self._is_cacheable(document, caching):
            return Decision.respond(response, "nothing saved to cache")

        if await self._store.exists(key):
            return Decision.respond(response, "value already cached")

        ttl = caching.ttl if caching is not None else self._config.default_ttl
        await self._store.write(key, self._serializer.serialize(response), ttl)
        self._writes += 1
        return Decision.respond(response, "saved response to cache")

    def _is_cacheable(
        self,
        document: dict[str, Any],
        caching: CachingRequest | None,
    ) -> bool:
        # Without an allow-list every query not opted out is cacheable
        if caching is not None or not self._queries_to_cache:
            return True
        return canonical_json(document) in self._queries_to_cache

    def _check_auth(self, headers: Mapping[str, str]) -> None:
        supplied = next(
            (value for name, value in headers.items() if name.lower() == AUTH_HEADER),
            None,
        )
        if supplied is None or not hmac.compare_digest(
            supplied.encode("utf-8"), self._config.secret.encode("utf-8")
        ):
            raise AuthError("unauthorised request")

    def _error_decision(self, phase: str, error: GqlCacheError) -> Decision:
        if isinstance(error, AuthError):
            return Decision.user_error(str(error), status=error.status)
        if error.user_facing:
            return Decision.user_error(f"bad request: {error}", status=error.status)

        logger.exception("Internal error handling %s request", phase)
        return Decision.server_error(f"{type(error).__name__}: {error}")

    def _log_decision(self, phase: str, decision: Decision) -> Decision:
        if decision.is_error:
            level = logging.WARNING if decision.status < 500 else logging.ERROR
        else:
            level = logging.DEBUG
        logger.log(
            level,
            "%s: %s",
            phase,
            decision.label,
            extra={
                "phase": phase,
                "status": decision.status,
                "visibility": decision.visibility.value,
            },
        )
        return decision
