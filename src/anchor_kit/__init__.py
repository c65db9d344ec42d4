"""Configuration core for Stellar anchor services."""

from __future__ import annotations

from .config.manager import AnchorConfig
from .config.models import AnchorKitConfig, Asset
from .core.errors import (
    AnchorKitError,
    ConfigError,
    ConfigurationError,
    ErrorKind,
    RailError,
    RequestValidationError,
    SepProtocolError,
    TransactionStateError,
)
from .utils.constants import NETWORK_PASSPHRASES, StellarNetwork

__version__ = "0.1.0"

__all__ = [
    "AnchorConfig",
    "AnchorKitConfig",
    "AnchorKitError",
    "Asset",
    "ConfigError",
    "ConfigurationError",
    "ErrorKind",
    "NETWORK_PASSPHRASES",
    "RailError",
    "RequestValidationError",
    "SepProtocolError",
    "StellarNetwork",
    "TransactionStateError",
    "__version__",
]
