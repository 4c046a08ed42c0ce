"""structlog setup for applications embedding pushsource.

The library itself only calls ``structlog.get_logger()``; nothing is
configured on import. Hosts that want filtered or JSON output call
``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def configure_logging(level: str = "info", *, json: bool = False) -> None:
    """Configure structlog processors and the minimum level."""
    try:
        min_level = _LEVELS[level.lower()]
    except KeyError:
        msg = f"Unknown log level '{level}', expected one of {sorted(_LEVELS)}"
        raise ValueError(msg) from None

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        cache_logger_on_first_use=False,
    )
