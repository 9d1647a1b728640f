"""Structured logging for the hosting library.

All modules obtain their loggers here so structlog is configured in one place.
The library never configures structlog on import; applications call
configure_logging() once at startup (the self-test does so when run as a
script).
"""

import logging
from typing import Any, Optional

import structlog

from firebird_hosting.settings import is_debug


def configure_logging(debug: Optional[bool] = None) -> None:
    """Configure structlog for console output.

    Args:
        debug: Force debug level. If None, reads FIREBIRD_HOSTING_DEBUG.
    """
    if debug is None:
        debug = is_debug()
    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def get_component_logger(component: str, logger: Optional[Any] = None) -> Any:
    """Get logger bound to a component name.

    Args:
        component: Component name (e.g., "FirebirdServer", "Eventing")
        logger: Optional injected logger. If None, uses default structlog logger.

    Returns:
        Logger bound to the component name
    """
    base = logger or structlog.get_logger()
    return base.bind(component=component)


def get_logger() -> Any:
    """Get default structured logger."""
    return structlog.get_logger()
