"""Utility modules for logging and common helpers."""

from cpi_engine.utils.logging import configure_logging, get_logger, log_event

__all__ = ["configure_logging", "get_logger", "log_event"]
