"""Scrub secret-looking values before they reach logs or error payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import SecretStr

_SUSPECT_SUBSTRINGS = (
    "key",
    "token",
    "secret",
    "password",
    "passphrase",
    "authorization",
    "cookie",
    "dsn",
)

REDACTED = "[REDACTED]"


def is_secret_key(key: Any) -> bool:
    lowered = str(key).strip().lower()
    return any(sub in lowered for sub in _SUSPECT_SUBSTRINGS)


def redact_value(value: Any) -> Any:
    # Keep structure, drop content.
    if value is None:
        return None
    return REDACTED


def redact_dict(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively redact secret-like keys and ``SecretStr`` values."""

    def _walk(obj: Any) -> Any:
        if isinstance(obj, SecretStr):
            return REDACTED
        if isinstance(obj, Mapping):
            out: dict[str, Any] = {}
            for key, value in obj.items():
                out[str(key)] = redact_value(value) if is_secret_key(key) else _walk(value)
            return out
        if isinstance(obj, (list, tuple)):
            return [_walk(item) for item in obj]
        return obj

    if not isinstance(payload, Mapping):
        return {}
    return _walk(payload)


__all__ = ["REDACTED", "is_secret_key", "redact_dict", "redact_value"]
