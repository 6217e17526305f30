"""Serializer implementations."""

from gqlcache.infrastructure.serializers.json import JsonSerializer

__all__ = ["JsonSerializer"]
