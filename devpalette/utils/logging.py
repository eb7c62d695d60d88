"""
DevPalette Structured Logging
Centralized logging configuration using loguru.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from devpalette.config import config

_configured = False


def configure_logging(level: str = config.LOG_LEVEL, serialize: bool = config.LOG_JSON):
    """Route loguru to stdout with the DevPalette record format."""
    global _configured
    logger.remove()
    logger.configure(extra={"component": "devpalette"})
    logger.add(
        sys.stdout,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[component]} | {message} | {extra}",
        level=level,
        serialize=serialize
    )
    _configured = True


class StructuredLogger:
    """Logger bound to one DevPalette component, with optional extra fields per record."""

    def __init__(self, component: str):
        if not _configured:
            configure_logging()
        self.component = component
        self._logger = logger.bind(component=component)

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        target = self._logger.bind(**extra) if extra else self._logger
        target.log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(component: str = "devpalette") -> StructuredLogger:
    """Get or create the logger for a component."""
    if component not in _loggers:
        _loggers[component] = StructuredLogger(component)
    return _loggers[component]
