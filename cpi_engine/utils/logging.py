"""
Structured logging for the CPI analytics engine, built on structlog.

Engine modules only call ``structlog.get_logger()``; rendering is decided once
by ``configure_logging``. Console output is the default. JSON lines are used
when ``log_format=json`` and dev mode is off, which is what batch jobs should
set. Logs go to stderr so the CLI can keep stdout for the snapshot JSON.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from cpi_engine import __version__
from cpi_engine.config import Settings, get_settings


def add_severity(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add severity level for structured logging."""
    event_dict["severity"] = method_name.upper()
    return event_dict


def add_engine_version(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp every event with the package version that produced it."""
    event_dict.setdefault("engine_version", __version__)
    return event_dict


def _select_renderer(settings: Settings) -> Processor:
    if settings.log_format == "json" and not settings.dev_mode:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        settings: Settings to read ``log_level``/``log_format``/``dev_mode``
            from; defaults to ``get_settings()``
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_severity,
            add_engine_version,
            _select_renderer(settings),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "cpi_engine") -> structlog.BoundLogger:
    """Named structlog logger; the name shows up as ``logger`` once configured."""
    return structlog.get_logger(name)


def log_event(
    logger: structlog.BoundLogger,
    level: str,
    event: str,
    **kwargs: Any,
) -> None:
    """
    Emit ``event`` at a level chosen at runtime.

    Unknown level names fall back to ``info``.
    """
    log_func = getattr(logger, level.lower(), logger.info)
    log_func(event, **kwargs)
