"""Tests for the key-value snapshot stores."""

from unittest.mock import MagicMock

from focusramp.session.store import InMemoryKeyValueStore, RedisKeyValueStore


def test_in_memory_store():
    store = InMemoryKeyValueStore()

    store.set("k", "v")
    assert store.get("k") == "v"
    assert "k" in store

    store.delete("k")
    store.delete("k")
    assert store.get("k") is None
    assert len(store) == 0


def test_redis_store_get_decodes_bytes():
    client = MagicMock()
    client.get.return_value = b'{"a": 1}'

    assert RedisKeyValueStore(client=client).get("k") == '{"a": 1}'


def test_redis_store_get_missing():
    client = MagicMock()
    client.get.return_value = None

    assert RedisKeyValueStore(client=client).get("k") is None


def test_redis_store_set_without_ttl():
    client = MagicMock()

    RedisKeyValueStore(client=client).set("k", "v")

    client.set.assert_called_once_with("k", "v")


def test_redis_store_set_with_ttl():
    client = MagicMock()

    RedisKeyValueStore(client=client, ttl_seconds=86400).set("k", "v")

    client.set.assert_called_once_with("k", "v", ex=86400)


def test_redis_store_delete():
    client = MagicMock()

    RedisKeyValueStore(client=client).delete("k")

    client.delete.assert_called_once_with("k")
