"""
Repository: SQL operations for `events`.

This file contains only DB interaction code. Keep business rules out of
this module.

Important notes:
- SQL strings use positional parameters for psycopg.
- `payload` is wrapped in `Jsonb` so Postgres stores native JSONB; a
  missing payload is stored as NULL.
- Each method borrows a pooled connection; the insert is committed when
  the connection is returned, so the row is durable once
  `insert_event` returns.
"""

from typing import Any, Optional

from psycopg.types.json import Jsonb

from db import get_conn


class EventRepo:
    """DB access only. No business logic here."""

    def insert_event(self, app_id: int, type: str, payload: Optional[Any]) -> None:
        with get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO events (app_id, type, payload) VALUES (%s, %s, %s)",
                    (app_id, type, Jsonb(payload) if payload is not None else None),
                )

    def count_for_app(self, app_id: int) -> int:
        """Authoritative number of events stored for `app_id`."""

        with get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT COUNT(*)::int AS total FROM events WHERE app_id = %s",
                    (app_id,),
                )
                return cur.fetchone()[0]

    def ping(self) -> None:
        """Lightweight DB health check. Raises on error.

        Used by `/healthz` to validate DB reachability.
        """

        with get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
