"""GraphQL query normalization.

The parser records where in the source text every node came from. Two
queries that differ only in whitespace therefore produce different trees.
Normalizing converts the parsed document into plain nested data with all
location metadata removed, so equal queries compare and serialize equal.
"""

from enum import Enum
from typing import Any

from graphql import GraphQLSyntaxError, Node, parse

from gqlcache.core.exceptions import QueryParseError

LOCATION_KEY = "loc"


def normalize(query: str) -> dict[str, Any]:
    """Parse a query and return its location-free syntax tree.

    Args:
        query: The GraphQL query text.

    Returns:
        The document as nested dicts and lists, keyed by node field names
        plus ``kind``.

    Raises:
        QueryParseError: If the query is not valid GraphQL.
    """
    try:
        document = parse(query, no_location=True)
    except GraphQLSyntaxError as e:
        raise QueryParseError(f"invalid query: {e.message}") from e
    return strip_locations(document)


def strip_locations(tree: Any) -> Any:
    """Convert a syntax tree into plain data without location metadata.

    Accepts parsed nodes as well as trees already converted to dicts and
    lists. Every node is visited once; the input is never modified.

    Args:
        tree: A node, a sequence of nodes, or a converted tree.

    Returns:
        A new tree of dicts, lists and scalars with no ``loc`` members.
    """
    if isinstance(tree, Node):
        converted: dict[str, Any] = {"kind": tree.kind}
        for key in tree.keys:
            if key != LOCATION_KEY:
                converted[key] = strip_locations(getattr(tree, key))
        return converted

    if isinstance(tree, dict):
        return {
            key: strip_locations(value)
            for key, value in tree.items()
            if key != LOCATION_KEY
        }

    if isinstance(tree, (list, tuple)):
        return [strip_locations(item) for item in tree]

    if isinstance(tree, Enum):
        return tree.value

    return tree
