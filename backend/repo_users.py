"""
Repository: SQL operations for `users`.
"""

from typing import Any, Dict, Optional

from db import get_conn


class UserRepo:
    def insert_user(self, email: str, name: Optional[str]) -> Dict[str, Any]:
        """Insert one user and return the stored row as a dict.

        Constraint violations from Postgres propagate as psycopg errors.
        """

        with get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO users (email, name) VALUES (%s, %s) "
                    "RETURNING id, email, name, created_at",
                    (email, name),
                )
                r = cur.fetchone()
                return {
                    "id": r[0],
                    "email": r[1],
                    "name": r[2],
                    "created_at": r[3],
                }
