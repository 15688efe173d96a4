from __future__ import annotations

import logging
import os
from typing import Optional

LIBRARY_LOGGER = "sortable_columns"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d - %(message)s"

_configured_level: Optional[int] = None


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.getenv("SORTABLE_LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        value = logging.getLevelName(name)
        return value if isinstance(value, int) else logging.INFO
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger inside the ``sortable_columns`` hierarchy, e.g. ``get_logger("links")``."""

    if not name:
        return logging.getLogger(LIBRARY_LOGGER)
    if name == LIBRARY_LOGGER or name.startswith(LIBRARY_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LIBRARY_LOGGER}.{name}")


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Install the root handler once and set the library logger level.

    Later calls leave the handler alone but still apply an explicit ``level``
    to the library logger, so a service can raise verbosity after start-up.
    """

    global _configured_level
    level_value = _resolve_level(level)
    if _configured_level is None:
        logging.basicConfig(level=level_value, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        _configured_level = level_value
    elif level is not None:
        _configured_level = level_value
    library_logger = get_logger()
    library_logger.setLevel(_configured_level)
    return library_logger


def log_exception(logger: Optional[logging.Logger], message: str, exc: BaseException) -> None:
    (logger or get_logger()).error("%s: %s", message, exc, exc_info=True)
