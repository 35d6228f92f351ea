"""Service-level rules, without the HTTP layer."""

import pytest

from service_events import AppNotFound


def test_register_requires_email(user_service, store):
    with pytest.raises(ValueError, match="email required"):
        user_service.register(None, "Ann")
    assert store.users == []


def test_register_blank_name_stored_as_null(user_service):
    assert user_service.register("a@x.com", "")["name"] is None


def test_collect_returns_app_id(event_service, store):
    assert event_service.collect("key-app-7", "click") == 7
    assert len(store.events) == 1


def test_collect_unknown_key_writes_nothing(event_service, store, fake_redis):
    with pytest.raises(AppNotFound):
        event_service.collect("bad", "click")
    assert store.events == []
    assert fake_redis.data == {}


def test_collect_insert_failure_skips_counter(event_service, fake_redis, monkeypatch):
    def fail(*args):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(event_service.events, "insert_event", fail)
    with pytest.raises(RuntimeError, match="insert failed"):
        event_service.collect("key-app-7", "click")
    assert fake_redis.data == {}


def test_each_collect_adds_exactly_one(event_service, store, fake_redis):
    for _ in range(5):
        event_service.collect("key-app-7", "click")
    assert event_service.stats(7) == {"total_events": 5, "redis_count": 5}
