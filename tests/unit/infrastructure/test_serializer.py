"""Tests for JsonSerializer."""

import pytest

from gqlcache.core.exceptions import SerializationError
from gqlcache.infrastructure.serializers.json import JsonSerializer


class TestJsonSerializer:
    """Tests for JsonSerializer."""

    @pytest.fixture
    def serializer(self) -> JsonSerializer:
        """Create a serializer for testing."""
        return JsonSerializer()

    def test_serialize_response(self, serializer: JsonSerializer) -> None:
        """Test serializing a GraphQL response body."""
        result = serializer.serialize({"data": {"artist": {"name": "X"}}})

        assert result == b'{"data":{"artist":{"name":"X"}}}'

    def test_deserialize_response(self, serializer: JsonSerializer) -> None:
        result = serializer.deserialize(b'{"data": {"artist": null}}')

        assert result == {"data": {"artist": None}}

    def test_unicode(self, serializer: JsonSerializer) -> None:
        original = {"data": {"name": "Motörhead"}}

        assert serializer.deserialize(serializer.serialize(original)) == original

    def test_serialize_error(self, serializer: JsonSerializer) -> None:
        """Test serialization error for unsupported values."""
        with pytest.raises(SerializationError):
            serializer.serialize({"data": object()})

    def test_nan_is_rejected(self, serializer: JsonSerializer) -> None:
        with pytest.raises(SerializationError):
            serializer.serialize({"data": float("nan")})

    def test_deserialize_error(self, serializer: JsonSerializer) -> None:
        """Test deserialization error for invalid data."""
        with pytest.raises(SerializationError):
            serializer.deserialize(b"not valid json {")

    def test_deserialize_bad_encoding(self, serializer: JsonSerializer) -> None:
        with pytest.raises(SerializationError):
            serializer.deserialize(b"\xff\xfe")
