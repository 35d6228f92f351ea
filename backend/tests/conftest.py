"""
Shared fixtures for backend tests.

Routes reach the services through `main.get_event_service` /
`main.get_user_service`; the `client` fixture overrides both with
services wired to in-memory repos, so no Postgres or Redis is needed.
The counter path uses the real `CounterRepo` on top of `FakeRedis`.
"""

from datetime import datetime, timezone
import itertools

import pytest
import redis
from fastapi.testclient import TestClient

import main
from repo_counters import CounterRepo
from service_events import EventService
from service_users import UserService


class FakeStore:
    """Tables as plain Python lists/dicts."""

    def __init__(self):
        self.users = []
        self.apps = {}
        self.events = []
        self.down = False
        self._user_ids = itertools.count(1)

    def add_app(self, app_id, api_key):
        self.apps[api_key] = app_id

    def check(self):
        if self.down:
            raise RuntimeError("connection refused")


class FakeUserRepo:
    def __init__(self, store):
        self.store = store

    def insert_user(self, email, name):
        self.store.check()
        row = {
            "id": next(self.store._user_ids),
            "email": email,
            "name": name,
            "created_at": datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        }
        self.store.users.append(row)
        return row


class FakeAppRepo:
    def __init__(self, store):
        self.store = store

    def find_id_by_api_key(self, api_key):
        self.store.check()
        return self.store.apps.get(api_key)


class FakeEventRepo:
    def __init__(self, store):
        self.store = store

    def insert_event(self, app_id, type, payload):
        self.store.check()
        self.store.events.append({"app_id": app_id, "type": type, "payload": payload})

    def count_for_app(self, app_id):
        self.store.check()
        return sum(1 for e in self.store.events if e["app_id"] == app_id)

    def ping(self):
        self.store.check()


class FakeRedis:
    """The slice of the redis-py client the counters use."""

    def __init__(self):
        self.data = {}
        self.down = False

    def _check(self):
        if self.down:
            raise redis.exceptions.ConnectionError("Error 111 connecting to redis")

    def incr(self, key):
        self._check()
        self.data[key] = int(self.data.get(key, 0)) + 1
        return self.data[key]

    def get(self, key):
        self._check()
        value = self.data.get(key)
        return None if value is None else str(value)

    def ping(self):
        self._check()
        return True


@pytest.fixture()
def store():
    s = FakeStore()
    s.add_app(7, "key-app-7")
    return s


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def event_service(store, fake_redis):
    return EventService(FakeEventRepo(store), FakeAppRepo(store), CounterRepo(fake_redis))


@pytest.fixture()
def user_service(store):
    return UserService(FakeUserRepo(store))


@pytest.fixture()
def client(event_service, user_service):
    main.app.dependency_overrides[main.get_event_service] = lambda: event_service
    main.app.dependency_overrides[main.get_user_service] = lambda: user_service
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
