"""
Tests for the in-memory and Redis record stores.
"""

import json
from unittest.mock import MagicMock

import pytest
import redis

from securepay.storage.record_store import (
    InMemoryRecordStore,
    RedisRecordStore,
    create_record_store,
)


def test_get_returns_default_for_missing_key(store):
    assert store.get("missing") is None
    assert store.get("missing", []) == []


def test_last_write_wins(store):
    store.set("key", {"a": 1})
    store.set("key", {"a": 2})

    assert store.get("key") == {"a": 2}


def test_values_are_copied(store):
    value = {"items": [1, 2]}
    store.set("key", value)
    value["items"].append(3)

    fetched = store.get("key")
    fetched["items"].append(4)

    assert store.get("key") == {"items": [1, 2]}


def test_ttl_expiry(fake_clock):
    store = InMemoryRecordStore(clock=fake_clock)
    store.set("otp", "123456", ttl=30)

    fake_clock.advance(29)
    assert store.get("otp") == "123456"

    fake_clock.advance(1)
    assert store.get("otp") is None


def test_delete_and_clear(store):
    store.set("a", 1)
    store.set("b", 2)

    store.delete("a")
    store.delete("never-set")
    assert store.get("a") is None

    store.clear()
    assert store.get("b") is None


def test_ping(store):
    assert store.ping() is True


def test_redis_store_prefixes_and_encodes():
    client = MagicMock()
    client.get.return_value = json.dumps([{"id": "usr_1"}])
    store = RedisRecordStore(client, key_prefix="securepay:")

    assert store.get("pss_users") == [{"id": "usr_1"}]
    client.get.assert_called_once_with("securepay:pss_users")

    store.set("pss_users", [])
    client.set.assert_called_with("securepay:pss_users", "[]")

    store.set("otp:a@b.c", {"otp": "1"}, ttl=300)
    client.set.assert_called_with("securepay:otp:a@b.c", '{"otp": "1"}', px=300000)

    store.delete("otp:a@b.c")
    client.delete.assert_called_once_with("securepay:otp:a@b.c")


def test_redis_store_missing_and_corrupt_values():
    client = MagicMock()
    store = RedisRecordStore(client)

    client.get.return_value = None
    assert store.get("key", "fallback") == "fallback"

    client.get.return_value = "{not json"
    assert store.get("key", "fallback") == "fallback"


def test_redis_ping_failure():
    client = MagicMock()
    client.ping.side_effect = redis.ConnectionError("down")

    assert RedisRecordStore(client).ping() is False


def test_create_record_store():
    assert isinstance(create_record_store({}), InMemoryRecordStore)

    redis_store = create_record_store(
        {"backend": "redis", "redis_host": "cache", "key_prefix": "sp:"}
    )
    assert isinstance(redis_store, RedisRecordStore)
    assert redis_store.key_prefix == "sp:"

    with pytest.raises(ValueError):
        create_record_store({"backend": "sqlite"})
