"""Canonical serialization and hashing utilities for cache keys."""

import hashlib
import json
from typing import Any


def canonical_json(value: Any) -> str:
    """Serialize a value to JSON deterministically.

    Object members are emitted in sorted order with compact separators, so
    structurally equal values always give byte-identical strings.

    Args:
        value: Any JSON-serializable value.

    Returns:
        The canonical JSON text.
    """
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def hash_value(value: str) -> str:
    """Create a deterministic hash of a string.

    Args:
        value: The text to hash.

    Returns:
        A hexadecimal SHA-256 digest.
    """
    return hashlib.sha256(value.encode("utf-8")).hexdigest()
