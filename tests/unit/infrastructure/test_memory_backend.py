"""Tests for InMemoryCacheStore."""

import pytest

from gqlcache.infrastructure.backends.memory import InMemoryCacheStore


class TestInMemoryCacheStore:
    """Tests for InMemoryCacheStore."""

    @pytest.mark.asyncio
    async def test_write_and_read(self, store: InMemoryCacheStore) -> None:
        """Test basic write and read operations."""
        await store.write("key1", b"value1", 60)

        assert await store.read("key1") == b"value1"
        assert await store.exists("key1") is True

    @pytest.mark.asyncio
    async def test_read_missing_key(self, store: InMemoryCacheStore) -> None:
        """Test reading a missing key returns None."""
        assert await store.read("nonexistent") is None
        assert await store.exists("nonexistent") is False

    @pytest.mark.asyncio
    async def test_write_overwrites(self, store: InMemoryCacheStore) -> None:
        await store.write("key1", b"old", 60)
        await store.write("key1", b"new", 60)

        assert await store.read("key1") == b"new"
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, store: InMemoryCacheStore) -> None:
        """Test deleting a key, twice."""
        await store.write("key1", b"value1", 60)

        await store.delete("key1")
        await store.delete("key1")

        assert await store.read("key1") is None

    @pytest.mark.asyncio
    async def test_expiry(self, store: InMemoryCacheStore, clock) -> None:
        """Test an entry is valid for exactly its TTL."""
        await store.write("key1", b"value1", 6)
        assert await store.exists("key1") is True

        clock.advance(6)
        assert await store.exists("key1") is True

        clock.advance(0.001)
        assert await store.exists("key1") is False
        assert await store.read("key1") is None

    @pytest.mark.asyncio
    async def test_expired_entry_still_held(
        self, store: InMemoryCacheStore, clock
    ) -> None:
        """Test expiry is lazy: the entry is absent but not yet purged."""
        await store.write("key1", b"value1", 1)
        clock.advance(2)

        assert await store.exists("key1") is False
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_rewrite_after_expiry(self, store: InMemoryCacheStore, clock) -> None:
        await store.write("key1", b"old", 1)
        clock.advance(2)
        await store.write("key1", b"new", 1)

        assert await store.read("key1") == b"new"

    @pytest.mark.asyncio
    async def test_per_entry_ttl(self, store: InMemoryCacheStore, clock) -> None:
        await store.write("short", b"s", 5)
        await store.write("long", b"l", 50)
        clock.advance(10)

        assert await store.exists("short") is False
        assert await store.exists("long") is True

    @pytest.mark.asyncio
    async def test_lru_eviction(self, clock) -> None:
        """Test LRU eviction when maxsize is reached."""
        store = InMemoryCacheStore(maxsize=3, timer=clock)

        await store.write("key1", b"value1", 300)
        await store.write("key2", b"value2", 300)
        await store.write("key3", b"value3", 300)

        # Access key1 to make it recently used
        await store.read("key1")

        # Add key4, should evict key2 (least recently used)
        await store.write("key4", b"value4", 300)

        assert await store.read("key1") == b"value1"
        assert await store.read("key2") is None
        assert await store.read("key3") == b"value3"
        assert await store.read("key4") == b"value4"

    @pytest.mark.asyncio
    async def test_ping_and_close(self, store: InMemoryCacheStore) -> None:
        await store.write("key1", b"value1", 60)

        assert await store.ping() is True
        await store.close()
        assert len(store) == 0

    def test_maxsize_property(self) -> None:
        """Test maxsize property."""
        assert InMemoryCacheStore(maxsize=500).maxsize == 500
