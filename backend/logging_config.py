"""
Logging setup for the backend.

Modules log through `logging.getLogger(__name__)`; only `main.create_app`
calls `setup_logging`.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Log to stderr, and also to `logfile` when `LOG_FILE` is set.

    No-op once the root logger has handlers (tests, a second `create_app`).
    """

    if logging.getLogger().handlers:
        return

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
