"""Configured key builder implementation."""

import logging
from collections.abc import Mapping
from typing import Any

from gqlcache.core.entities.cache_config import CacheKeyConfig, KeyStrategy
from gqlcache.core.entities.plugin_request import PreParseRequest
from gqlcache.core.exceptions import MissingHeaderError, SerializationError
from gqlcache.core.services.directive_policy import DirectivePolicy
from gqlcache.core.services.normalizer import normalize
from gqlcache.utils.hashing import canonical_json

logger = logging.getLogger(__name__)


class ConfiguredKeyBuilder:
    """Key builder driven by a declarative cache-key configuration.

    Creates deterministic cache keys as canonical JSON documents that
    contain only the request components the configuration enables:

        {"rawRequest": {...}, "session": {...}, "headers": {...}}
    """

    def __init__(
        self,
        key_config: CacheKeyConfig | None = None,
        strategy: KeyStrategy = KeyStrategy.CONFIGURED,
        policy: DirectivePolicy | None = None,
    ) -> None:
        """Initialize the key builder.

        Args:
            key_config: Components to include. None selects the default
                composition of query, variables and session.
            strategy: How keys are derived.
            policy: Directive policy used to strip or filter directives.
        """
        self._key_config = key_config or CacheKeyConfig.default()
        self._strategy = strategy
        self._policy = policy or DirectivePolicy()

    @property
    def key_config(self) -> CacheKeyConfig:
        return self._key_config

    @property
    def strategy(self) -> KeyStrategy:
        return self._strategy

    def build(
        self,
        request: PreParseRequest,
        headers: Mapping[str, str],
        document: dict[str, Any] | None = None,
    ) -> str:
        """Build unique cache key for a plugin request.

        Args:
            request: The validated plugin request.
            headers: HTTP headers of the plugin call.
            document: The already normalized query, if the caller has it.

        Returns:
            A canonical JSON string.

        Raises:
            QueryParseError: If the query cannot be parsed.
            MissingHeaderError: If a configured header is absent.
        """
        if document is None:
            document = normalize(request.raw_request.query)

        if self._strategy is KeyStrategy.DIRECTIVE_FILTERED:
            components = self._policy.filter_cache_directives(document)
        else:
            components = self._compose(
                request,
                self._policy.strip_control_directives(document),
                headers,
            )

        try:
            return canonical_json(components)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize cache key: {e}") from e

    def _compose(
        self,
        request: PreParseRequest,
        document: dict[str, Any],
        headers: Mapping[str, str],
    ) -> dict[str, Any]:
        config = self._key_config
        raw = request.raw_request
        components: dict[str, Any] = {}

        raw_request: dict[str, Any] = {}
        if config.raw_request.query:
            raw_request.update(raw.extra_fields)
            raw_request["query"] = document
        if config.raw_request.operation_name:
            raw_request["operationName"] = raw.operation_name
        if config.raw_request.variables:
            raw_request["variables"] = raw.variables
        if raw_request:
            components["rawRequest"] = raw_request

        if config.session:
            components["session"] = request.session_dict()

        if config.headers:
            components["headers"] = self._select_headers(headers)

        return components

    def _select_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        lowered = {name.lower(): value for name, value in headers.items()}
        selected = {}
        for header in self._key_config.headers:
            name = header.lower()
            if name not in lowered:
                logger.error(
                    "Required header for cache key is missing",
                    extra={
                        "missing_header": name,
                        "available_headers": sorted(lowered),
                    },
                )
                raise MissingHeaderError(header)
            selected[name] = lowered[name]
        return selected
