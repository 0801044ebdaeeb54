"""Logging setup for Debug Bundle.

The level comes from the caller, then ``DEBUG_BUNDLE_LOG_LEVEL``, then INFO.
"""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "DEBUG_BUNDLE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Loggers that are noisy at INFO while a bundle is served or fetched
_HTTP_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def resolve_log_level(level: Optional[str] = None) -> int:
    """Resolve a level name to a logging constant.

    Raises:
        ValueError: If the name is not a logging level
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {name}")
    return value


def setup_logging(
    level: Optional[str] = None,
    debug_http: bool = False,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level name (falls back to DEBUG_BUNDLE_LOG_LEVEL, then INFO)
        debug_http: Enable verbose HTTP client and access logging
    """
    resolved = resolve_log_level(level)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # basicConfig is a no-op once handlers exist; the level still applies
    logging.getLogger().setLevel(resolved)

    http_level = logging.DEBUG if debug_http else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
