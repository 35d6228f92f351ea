"""
Repository: SQL operations for `apps`.

Apps are reference data. The service only ever resolves an API key to an
app id; `insert_app` exists for the `scripts/create_app.py` tool.
"""

from typing import Optional

from db import get_conn


class AppRepo:
    def find_id_by_api_key(self, api_key: str) -> Optional[int]:
        """Return the app id owning `api_key`, or None when unknown."""

        with get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT id FROM apps WHERE api_key = %s", (api_key,))
                row = cur.fetchone()
                return row[0] if row else None

    def insert_app(self, api_key: str, name: Optional[str] = None) -> int:
        with get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO apps (api_key, name) VALUES (%s, %s) RETURNING id",
                    (api_key, name),
                )
                return cur.fetchone()[0]
