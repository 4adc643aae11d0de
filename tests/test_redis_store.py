"""Tests for the Redis store client."""
import asyncio

import pytest
from unittest.mock import MagicMock
import redis

from bignum.errors import ConversionError, StoreError
from bignum.services import KeyRef, RedisStore, StoreClient


class TestKeyRef:
    """Tests for KeyRef addressing."""

    def test_flat(self):
        ref = KeyRef.flat("acct")
        assert not ref.is_hash
        assert str(ref) == "acct"

    def test_hash(self):
        ref = KeyRef.in_hash("h", "f")
        assert ref.is_hash
        assert str(ref) == "h[f]"

    def test_bytes_keys(self):
        assert str(KeyRef.in_hash(b"h", b"f")) == "h[f]"

    def test_store_satisfies_protocol(self, store):
        assert isinstance(store, StoreClient)


class TestFetchAndStore:
    """Tests for plain reads and writes."""

    def test_fetch_absent(self, store):
        assert store.fetch(KeyRef.flat("missing")) is None
        assert store.fetch(KeyRef.in_hash("missing", "f")) is None

    def test_store_then_fetch(self, store, fake_redis):
        store.store(KeyRef.flat("k"), "1.5")
        store.store(KeyRef.in_hash("h", "f"), "2.5")
        assert fake_redis.get("k") == "1.5"
        assert fake_redis.hget("h", "f") == "2.5"
        assert store.fetch(KeyRef.flat("k")) == "1.5"
        assert store.fetch(KeyRef.in_hash("h", "f")) == "2.5"

    def test_wrong_type_error_passed_through(self, store, fake_redis):
        """Redis errors keep their original message."""
        fake_redis.hset("h", "f", "1")
        with pytest.raises(StoreError) as exc_info:
            store.fetch(KeyRef.flat("h"))
        assert exc_info.value.message.startswith("WRONGTYPE")

    def test_non_utf8_value_is_wrong_type(self, store, raw_redis):
        """Bytes that are not UTF-8 text are a conversion error, not a crash."""
        raw_redis.set("k", b"\xff\xfe1")
        raw_redis.hset("h", "f", b"\xff")
        with pytest.raises(ConversionError):
            store.fetch(KeyRef.flat("k"))
        with pytest.raises(ConversionError):
            store.fetch(KeyRef.in_hash("h", "f"))
        assert exc_info.value.reply == exc_info.value.message

    def test_connection_error_translated(self):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("Connection refused")
        store = RedisStore(client=client)
        with pytest.raises(StoreError, match="Connection refused"):
            store.get("k")

    def test_health_check(self, store):
        """Liveness is reported by health_check alone."""
        assert asyncio.run(store.health_check()) == (True, None)

        client = MagicMock()
        client.ping.side_effect = redis.ConnectionError("Connection refused")
        assert asyncio.run(RedisStore(client=client).health_check()) == (False, "Connection refused")


class TestUpdate:
    """Tests for the optimistic read-modify-write."""

    def test_update_absent_key(self, store, fake_redis):
        seen = []

        def compute(current):
            seen.append(current)
            return "1"

        assert store.update(KeyRef.flat("k"), compute) == "1"
        assert seen == [None]
        assert fake_redis.get("k") == "1"

    def test_update_hash_field(self, store, fake_redis):
        fake_redis.hset("h", "f", "5")
        assert store.update(KeyRef.in_hash("h", "f"), lambda current: current + "0") == "50"
        assert fake_redis.hget("h", "f") == "50"

    def test_compute_error_writes_nothing(self, store, fake_redis):
        """An exception from compute aborts the transaction."""
        fake_redis.set("k", "old")

        def compute(current):
            raise ConversionError()

        with pytest.raises(ConversionError):
            store.update(KeyRef.flat("k"), compute)
        assert fake_redis.get("k") == "old"

    def test_non_utf8_value_aborts_update(self, store, raw_redis):
        """Undecodable bytes fail the read before anything is written."""
        raw_redis.hset("h", "f", b"\xff")
        compute = MagicMock(return_value="1")

        with pytest.raises(ConversionError):
            store.update(KeyRef.in_hash("h", "f"), compute)
        compute.assert_not_called()
        assert raw_redis.hget("h", "f") == b"\xff"

    def test_concurrent_write_is_retried(self, store, fake_redis):
        """A write between WATCH and EXEC restarts the cycle with fresh data."""
        seen = []

        def compute(current):
            seen.append(current)
            if len(seen) == 1:
                fake_redis.set("k", "100")
            return f"{current}+1"

        assert store.update(KeyRef.flat("k"), compute) == "100+1"
        assert seen == [None, "100"]
        assert fake_redis.get("k") == "100+1"

    def test_gives_up_after_max_retries(self, store, fake_redis):
        seen = []

        def compute(current):
            seen.append(current)
            fake_redis.set("k", str(len(seen)))
            return "mine"

        with pytest.raises(StoreError, match="modified concurrently"):
            store.update(KeyRef.flat("k"), compute)
        assert len(seen) == store.max_watch_retries
        assert fake_redis.get("k") == str(store.max_watch_retries)


class TestDeletePattern:
    """Tests for pattern deletion."""

    def test_delete_pattern(self, store, fake_redis):
        fake_redis.set("bn:a", "1")
        fake_redis.set("bn:b", "2")
        fake_redis.set("other", "3")
        assert store.delete_pattern("bn:*") == 2
        assert fake_redis.get("other") == "3"
        assert fake_redis.get("bn:a") is None
