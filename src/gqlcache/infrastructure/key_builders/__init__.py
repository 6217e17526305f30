"""Key builder implementations."""

from gqlcache.infrastructure.key_builders.default import ConfiguredKeyBuilder

__all__ = ["ConfiguredKeyBuilder"]
