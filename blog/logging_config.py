"""Centralized logging configuration.

Applies the root level and per-category levels from Settings so that noisy
loggers (SQLAlchemy statements, uvicorn access lines) can be tuned without
touching the application loggers.

Usage:
    from blog.logging_config import setup_logging
    setup_logging()   # once, in the FastAPI lifespan
"""

import logging
import sys

from blog.config import settings

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field -> logger names it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "LOG_LEVEL_SQL": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
}


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.LOG_LEVEL))

    if not any(getattr(h, "_blog_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._blog_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    for field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
