"""
Database connection helper.

This module centralizes how connections are obtained. A single
`psycopg_pool.ConnectionPool` is created per process; it is opened by
the app lifespan (`open_pool`) and closed on shutdown (`close_pool`).
Repositories never construct connections themselves.

Usage:
    from db import get_conn
    with get_conn() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")

Leaving the `with` block returns the connection to the pool and commits
the transaction, or rolls it back if the block raised.
"""

import logging

from psycopg_pool import ConnectionPool

from settings import settings

logger = logging.getLogger(__name__)

# `open=False` so importing this module (tests, scripts) never touches
# the network. The lifespan hook opens it.
pool = ConnectionPool(
    settings.db_url,
    min_size=settings.db_pool_min_size,
    max_size=settings.db_pool_max_size,
    kwargs={"connect_timeout": 5},
    open=False,
)


def open_pool() -> None:
    logger.info("Opening database pool (min=%s, max=%s)", pool.min_size, pool.max_size)
    pool.open()


def close_pool() -> None:
    logger.info("Closing database pool")
    pool.close()


def get_conn():
    """Borrow a connection from the shared pool.

    Returns the pool's context manager; the connection goes back to the
    pool when the `with` block exits.
    """

    return pool.connection()
