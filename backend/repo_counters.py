"""
Repository: per-app event counters in Redis.

Counters are a fast, non-authoritative tally next to the `events` table.
They are incremented after the event row is written and are never
reconciled with it, so they may lag or drift.
"""

import redis

COUNTER_KEY = "app:{app_id}:events"


def counter_key(app_id: int) -> str:
    return COUNTER_KEY.format(app_id=app_id)


class CounterRepo:
    """Redis access only. Errors from the client propagate to the caller."""

    def __init__(self, client: redis.Redis):
        self.client = client

    def incr(self, app_id: int) -> int:
        return int(self.client.incr(counter_key(app_id)))

    def get(self, app_id: int) -> int:
        """Current counter value; 0 when the key is missing or not an integer."""

        raw = self.client.get(counter_key(app_id))
        try:
            return int(raw)
        except (TypeError, ValueError):
            return 0

    def ping(self) -> bool:
        return bool(self.client.ping())
