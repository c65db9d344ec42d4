"""Structured logging helpers with correlation ID support."""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..config.models import LoggingConfig
from ..config.settings import LogFormat, get_runtime_settings
from .redaction import redact_dict

_LOGGER_CACHE: Dict[str, logging.Logger] = {}
_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")
_LOGGING_CONFIGURED = False

_STANDARD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys())
_STANDARD_ATTRS.add("correlation_id")

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"
_FORMATS = {item.value for item in LogFormat}


class _CorrelationFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _CORRELATION_ID.get("-")
        return True


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """Formatter that emits one JSON object per record, secrets redacted."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", "-"),
        }
        extras = _extras(record)
        if extras:
            payload["extra"] = redact_dict(extras)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _build_handler(config: Optional[LoggingConfig], log_format: LogFormat) -> logging.Handler:
    if config is not None and config.file:
        handler: logging.Handler = logging.FileHandler(config.file)
    else:
        handler = logging.StreamHandler(sys.stdout)
    if log_format == LogFormat.TEXT:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(StructuredFormatter())
    handler.addFilter(_CorrelationFilter())
    return handler


def configure_logging(config: Optional[LoggingConfig] = None, *, force: bool = False) -> None:
    """Install the root handler once.

    Level and format come from the runtime settings; a ``framework.logging``
    section, when given, overrides them and may redirect output to a file.
    """

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED and not force:
        return
    settings = get_runtime_settings()
    level_name = (config.level if config and config.level else settings.log_level).upper()
    if level_name == "WARN":
        level_name = "WARNING"
    log_format = settings.log_format
    if config is not None and config.format and config.format.lower() in _FORMATS:
        log_format = LogFormat(config.format.lower())
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.addHandler(_build_handler(config, log_format))
    root.setLevel(getattr(logging, level_name, logging.INFO))
    logging.captureWarnings(True)
    _LOGGING_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger without touching the root handlers.

    Handlers are installed by :func:`configure_logging`, which the command line
    entrypoint and :func:`bootstrap_observability` call; a host application
    keeps its own logging setup otherwise.
    """

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


@contextmanager
def correlation_scope(correlation_id: Optional[str]):
    token = _CORRELATION_ID.set(correlation_id or "-")
    try:
        yield
    finally:
        _CORRELATION_ID.reset(token)


__all__ = ["StructuredFormatter", "configure_logging", "correlation_scope", "get_logger"]
