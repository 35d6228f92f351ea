import os
import sys

import psycopg

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from cache import close_redis, get_redis
from repo_counters import CounterRepo
from settings import settings

# Store count vs redis counter per app. Read-only: drift is reported, not fixed.
counters = CounterRepo(get_redis())

with psycopg.connect(settings.db_url) as conn:
    with conn.cursor() as cur:
        cur.execute(
            "SELECT a.id, COUNT(e.id) FROM apps a "
            "LEFT JOIN events e ON e.app_id = a.id GROUP BY a.id ORDER BY a.id"
        )
        for app_id, total in cur.fetchall():
            cached = counters.get(app_id)
            flag = '' if cached == total else '  <- drift'
            print(f'app {app_id}: events={total} redis={cached}{flag}')

close_redis()
