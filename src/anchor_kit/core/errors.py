"""Error taxonomy shared by the anchor configuration core and its callers.

The request validation error is named ``RequestValidationError`` so it does not
shadow ``pydantic.ValidationError`` in modules that use both; ``ValidationError``
is kept as an alias for callers that expect the shorter name.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from ..config.settings import get_runtime_settings


class ErrorKind(Enum):
    """Closed set of error kinds, each with a fixed HTTP status and machine code."""

    CONFIG = (500, "INVALID_CONFIG")
    REQUEST_VALIDATION = (400, "INVALID_REQUEST")
    SEP_PROTOCOL = (400, "SEP_PROTOCOL_ERROR")
    TRANSACTION_STATE = (400, "INVALID_STATE_TRANSITION")
    RAIL = (500, "RAIL_ERROR")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def error_code(self) -> str:
        return self.value[1]


class AnchorKitError(Exception):
    """Base error carrying a status code, a machine code and optional context.

    Only subclasses bound to an :class:`ErrorKind` can be raised.
    """

    kind: ClassVar[Optional[ErrorKind]] = None

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        if self.kind is None:
            raise TypeError(f"{type(self).__name__} is abstract; raise a concrete error kind")
        super().__init__(message)
        self.message = message
        self.status_code: int = self.kind.status_code
        self.error_code: str = self.kind.error_code
        self.context = context

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error_code, "message": self.message}
        # Context may echo partial secrets; only development consumers see it.
        if self.context is not None and get_runtime_settings().is_development:
            payload["context"] = self.context
        return payload

    def __repr__(self) -> str:
        return f"{self.name}(error_code={self.error_code!r}, message={self.message!r})"


class ConfigError(AnchorKitError):
    """Raised when the anchor configuration is incomplete or inconsistent."""

    kind = ErrorKind.CONFIG


ConfigurationError = ConfigError


class RequestValidationError(AnchorKitError):
    """Raised when an inbound request parameter is invalid."""

    kind = ErrorKind.REQUEST_VALIDATION


ValidationError = RequestValidationError


class SepProtocolError(AnchorKitError):
    """SEP protocol failure whose machine code is chosen by the protocol layer."""

    kind = ErrorKind.SEP_PROTOCOL

    def __init__(
        self,
        message: str,
        error_code: str,
        sep_error_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            {"errorCode": error_code, "sepErrorType": sep_error_type, **(context or {})},
        )
        self.error_code = error_code
        self.sep_error_type = sep_error_type


class TransactionStateError(AnchorKitError):
    """Raised on an illegal transaction status transition."""

    kind = ErrorKind.TRANSACTION_STATE

    def __init__(
        self,
        message: str,
        current_status: str,
        attempted_status: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            {
                "currentStatus": current_status,
                "attemptedStatus": attempted_status,
                **(context or {}),
            },
        )
        self.current_status = current_status
        self.attempted_status = attempted_status


class RailError(AnchorKitError):
    """Raised when a fiat payment rail fails."""

    kind = ErrorKind.RAIL

    def __init__(
        self,
        message: str,
        rail_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if rail_name is not None:
            details["railName"] = rail_name
        details.update(context or {})
        super().__init__(message, details or None)
        self.rail_name = rail_name


__all__ = [
    "AnchorKitError",
    "ConfigError",
    "ConfigurationError",
    "ErrorKind",
    "RailError",
    "RequestValidationError",
    "SepProtocolError",
    "TransactionStateError",
    "ValidationError",
]
