"""Evaluation of per-query caching directives.

Works on documents produced by ``normalizer.normalize``. Only the first
operation definition of a document is inspected. Directive names are
matched exactly, and when a name occurs more than once the first
occurrence wins.
"""

import logging
import re
from typing import Any

from gqlcache.core.entities.cache_config import DEFAULT_TTL
from gqlcache.core.entities.cache_directive import (
    CACHED_DIRECTIVE,
    CONTROL_DIRECTIVES,
    LEGACY_CACHE_DIRECTIVE,
    NOCACHE_DIRECTIVE,
    CachingRequest,
)

logger = logging.getLogger(__name__)

OPERATION_DEFINITION = "operation_definition"
TTL_KINDS = frozenset({"int_value", "float_value", "string_value"})

# Leading integer of a ttl literal: "6.5" reads as 6, "60s" as 60
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class DirectivePolicy:
    """Answers caching questions from the directives on an operation."""

    def __init__(self, default_ttl: int = DEFAULT_TTL) -> None:
        """Initialize the policy.

        Args:
            default_ttl: TTL in seconds used when ``@cached`` does not
                carry a usable ``ttl`` argument.
        """
        self._default_ttl = default_ttl

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def is_caching_disabled(self, document: dict[str, Any]) -> bool:
        """Check whether the operation carries ``@nocache``."""
        return _find_directive(document, NOCACHE_DIRECTIVE) is not None

    def caching_request(self, document: dict[str, Any]) -> CachingRequest | None:
        """Read the ``@cached`` directive of the operation.

        Args:
            document: A normalized document.

        Returns:
            None if the operation has no ``@cached`` directive, otherwise
            its TTL (falling back to the default) and refresh flag.
        """
        directive = _find_directive(document, CACHED_DIRECTIVE)
        if directive is None:
            return None

        arguments = _arguments(directive)
        return CachingRequest(
            ttl=self._parse_ttl(arguments.get("ttl")),
            refresh=_parse_refresh(arguments.get("refresh")),
        )

    def filter_cache_directives(self, document: dict[str, Any]) -> dict[str, Any]:
        """Return the operation with only ``@cache`` directives kept.

        This is the legacy keying form: the first operation alone, with
        every directive not literally named ``cache`` removed.

        Args:
            document: A normalized document.

        Returns:
            A new mapping; an empty one if the document has no operation.
        """
        operation = _first_operation(document)
        if operation is None:
            return {}
        filtered = dict(operation)
        filtered["directives"] = [
            directive
            for directive in _directives(operation)
            if _name(directive) == LEGACY_CACHE_DIRECTIVE
        ]
        return filtered

    def strip_control_directives(self, document: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of the document without ``@cached``/``@nocache``.

        Keys computed from the result are the same whichever caching
        arguments a client passes, so a refresh addresses the entry that
        plain requests for the same query read.
        """
        operation = _first_operation(document)
        if operation is None:
            return document

        stripped = dict(operation)
        stripped["directives"] = [
            directive
            for directive in _directives(operation)
            if _name(directive) not in CONTROL_DIRECTIVES
        ]
        definitions = [
            stripped if definition is operation else definition
            for definition in document.get("definitions") or []
        ]
        return {**document, "definitions": definitions}

    def _parse_ttl(self, value: dict[str, Any] | None) -> int:
        if value is None:
            return self._default_ttl
        if value.get("kind") not in TTL_KINDS:
            logger.debug("Unusable @cached ttl of kind %s", value.get("kind"))
            return self._default_ttl
        match = _LEADING_INT.match(str(value.get("value")))
        if match is None:
            logger.debug("Unparseable @cached ttl %r, using default", value.get("value"))
            return self._default_ttl
        ttl = int(match.group(1))
        if ttl <= 0:
            logger.debug("Non-positive @cached ttl %d, using default", ttl)
            return self._default_ttl
        return ttl


def _first_operation(document: dict[str, Any]) -> dict[str, Any] | None:
    for definition in document.get("definitions") or []:
        if definition.get("kind") == OPERATION_DEFINITION:
            return definition
    return None


def _directives(node: dict[str, Any]) -> list[dict[str, Any]]:
    return list(node.get("directives") or [])


def _name(node: dict[str, Any]) -> str | None:
    name = node.get("name") or {}
    return name.get("value")


def _find_directive(document: dict[str, Any], name: str) -> dict[str, Any] | None:
    operation = _first_operation(document)
    if operation is None:
        return None
    for directive in _directives(operation):
        if _name(directive) == name:
            return directive
    return None


def _arguments(directive: dict[str, Any]) -> dict[str, dict[str, Any]]:
    # First occurrence wins for repeated argument names
    arguments: dict[str, dict[str, Any]] = {}
    for argument in directive.get("arguments") or []:
        arguments.setdefault(_name(argument), argument.get("value") or {})
    return arguments


def _parse_refresh(value: dict[str, Any] | None) -> bool:
    if value is None or value.get("kind") != "boolean_value":
        return False
    return value.get("value") is True
