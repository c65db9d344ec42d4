"""Monitoring package exports and helpers."""

from __future__ import annotations

from typing import Optional

from ..config.models import FrameworkConfig
from .logger import configure_logging, correlation_scope, get_logger
from .redaction import redact_dict


def bootstrap_observability(framework: Optional[FrameworkConfig] = None) -> None:
    """(Re)configure logging from a resolved ``framework`` section."""

    logging_config = framework.logging if isinstance(framework, FrameworkConfig) else None
    configure_logging(logging_config, force=True)


__all__ = [
    "bootstrap_observability",
    "configure_logging",
    "correlation_scope",
    "get_logger",
    "redact_dict",
]
