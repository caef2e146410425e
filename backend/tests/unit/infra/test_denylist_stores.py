"""
Access-token denylist stores.

The Redis store is exercised against ``fakeredis.FakeRedis``; the in-memory
store is what the app uses when no Redis URL is configured.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import fakeredis
import pytest
from freezegun import freeze_time

from vidhub.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from vidhub.services._shared.ports.denylist_store import InMemoryDenylistStore


def _now() -> datetime:
    return datetime.now(UTC)


@pytest.fixture
def fake_redis():
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def redis_store(fake_redis):
    return RedisTokenDenylistStore(fake_redis)


def test_redis_revoke_marks_jti(redis_store):
    assert redis_store.is_revoked("jti-1") is False
    redis_store.revoke_jti(jti="jti-1", expires_at=_now() + timedelta(minutes=5))
    assert redis_store.is_revoked("jti-1") is True
    assert redis_store.is_revoked("jti-2") is False


def test_redis_ttl_matches_remaining_lifetime(redis_store, fake_redis):
    redis_store.revoke_jti(jti="jti-ttl", expires_at=_now() + timedelta(seconds=120))
    ttl = fake_redis.ttl("deny:at:jti-ttl")
    assert 0 < ttl <= 120


def test_redis_skips_already_expired_tokens(redis_store, fake_redis):
    redis_store.revoke_jti(jti="old", expires_at=_now() - timedelta(seconds=1))
    assert fake_redis.exists("deny:at:old") == 0


def test_redis_custom_prefix(fake_redis):
    store = RedisTokenDenylistStore(fake_redis, prefix="vh:deny:")
    store.revoke_jti(jti="abc", expires_at=_now() + timedelta(minutes=1))
    assert fake_redis.exists("vh:deny:abc") == 1


def test_in_memory_store_expires_entries():
    store = InMemoryDenylistStore()
    with freeze_time("2026-01-01 00:00:00"):
        store.revoke_jti(jti="x", expires_at=_now() + timedelta(minutes=1))
        assert store.is_revoked("x") is True
    with freeze_time("2026-01-01 00:02:00"):
        assert store.is_revoked("x") is False


@freeze_time("2026-01-01 00:00:00")
def test_redis_ttl_rounds_up_partial_seconds(redis_store, fake_redis):
    redis_store.revoke_jti(jti="short", expires_at=_now() + timedelta(milliseconds=500))
    assert fake_redis.exists("deny:at:short") == 1


def test_in_memory_store_sweeps_expired_entries_on_revoke():
    store = InMemoryDenylistStore()
    with freeze_time("2026-01-01 00:00:00"):
        for n in range(50):
            store.revoke_jti(jti=f"old-{n}", expires_at=_now() + timedelta(seconds=30))
        assert len(store._revoked) == 50
    with freeze_time("2026-01-01 00:05:00"):
        store.revoke_jti(jti="fresh", expires_at=_now() + timedelta(minutes=1))
        assert set(store._revoked) == {"fresh"}
        store.revoke_jti(jti="dead", expires_at=_now() - timedelta(seconds=1))
        assert set(store._revoked) == {"fresh"}
