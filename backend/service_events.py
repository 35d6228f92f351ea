"""
Service / facade layer for event collection and stats.

This module implements the request rules and the ordering of store and
cache calls. It is free of SQL and Redis commands; it calls the repos.

Key responsibilities:
- validate collect input (`apiKey` and `type` present)
- resolve the API key to an app before anything is written
- write the event, then bump the app's Redis counter
- report the store count and the counter side by side
- probe both dependencies for `/healthz`

Store and cache writes are not transactional together. If the counter
increment fails, the event row is already committed and stays; the
error still propagates so the caller sees a failure.
"""

import logging
from typing import Any, Dict, Optional

from repo_apps import AppRepo
from repo_counters import CounterRepo
from repo_events import EventRepo

logger = logging.getLogger(__name__)


class AppNotFound(LookupError):
    """No app is registered under the given API key."""


class EventService:
    """Business rules + sequencing.

    Example usage:
        svc = EventService(EventRepo(), AppRepo(), CounterRepo(get_redis()))
        svc.collect("key-123", "click", {"x": 1})
    """

    def __init__(self, events: EventRepo, apps: AppRepo, counters: CounterRepo):
        self.events = events
        self.apps = apps
        self.counters = counters

    def collect(self, api_key: Optional[str], type: Optional[str], payload: Optional[Any] = None) -> int:
        """Record one event for the app owning `api_key`. Returns the app id.

        Raises:
        - `ValueError` if `api_key` or `type` is missing
        - `AppNotFound` if no app has this API key (nothing is written)
        """

        if not api_key or not type:
            raise ValueError("apiKey and type required")

        app_id = self.apps.find_id_by_api_key(api_key)
        if app_id is None:
            raise AppNotFound("app not found")

        self.events.insert_event(app_id, type, payload)

        try:
            self.counters.incr(app_id)
        except Exception:
            logger.warning("Event stored for app %s but counter increment failed", app_id)
            raise
        return app_id

    def stats(self, app_id: int) -> Dict[str, int]:
        """Store count and counter value for `app_id`.

        There is no existence check: an unknown app reports zero for both.
        """

        total = self.events.count_for_app(app_id)
        cached = self.counters.get(app_id)
        return {"total_events": total, "redis_count": cached}

    def health_check(self) -> Dict[str, Any]:
        """Ping the DB then Redis, once each. Raises on the first failure."""

        self.events.ping()
        pong = self.counters.ping()
        return {"status": "ok", "db": True, "redis": pong}
