"""Key builder interface."""

from collections.abc import Mapping
from typing import Any, Protocol

from gqlcache.core.entities.plugin_request import PreParseRequest


class IKeyBuilder(Protocol):
    """Contract for building cache keys from plugin requests.

    Key builders are responsible for creating unique, deterministic
    cache keys from the request components they are configured with.
    """

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
            A unique string key for caching the operation result.

        Raises:
            QueryParseError: If the query cannot be parsed.
            MissingHeaderError: If a configured header is absent.
        """
        ...
