#!/usr/bin/env python3
"""
Provision an app and print its API key.

Usage:
    python scripts/create_app.py [name]

There is no HTTP endpoint for creating apps; this is the only way to
mint an API key for `/api/collect`.
"""

import os
import secrets
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from db import close_pool, open_pool
from repo_apps import AppRepo


def main(name=None):
    api_key = secrets.token_hex(24)
    open_pool()
    try:
        app_id = AppRepo().insert_app(api_key, name)
    finally:
        close_pool()
    print(f"app id:  {app_id}")
    print(f"api key: {api_key}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
