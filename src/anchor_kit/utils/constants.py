"""Shared constants for Stellar network and anchor configuration."""

from enum import Enum


class StellarNetwork(str, Enum):
    """Stellar networks an anchor can be pointed at."""

    PUBLIC = "public"
    TESTNET = "testnet"
    FUTURENET = "futurenet"


DEFAULT_NETWORK = StellarNetwork.TESTNET

# Passphrases are part of every signed transaction hash; they must match byte for byte.
NETWORK_PASSPHRASES: dict[str, str] = {
    StellarNetwork.PUBLIC.value: "Public Global Stellar Network ; September 2015",
    StellarNetwork.TESTNET.value: "Test SDF Network ; September 2015",
    StellarNetwork.FUTURENET.value: "Test SDF Future Network ; Fall 2022",
}

VALID_NETWORKS: tuple[str, ...] = tuple(network.value for network in StellarNetwork)

DATABASE_URL_SCHEMES: tuple[str, ...] = (
    "postgresql:",
    "postgres:",
    "mysql:",
    "mysql2:",
    "sqlite:",
    "file:",
)

OPERATIONAL_DEFAULTS: dict[str, object] = {
    "webhooks_enabled": True,
    "queue_backend": "memory",
    "cors_enabled": True,
    "transaction_retention_days": 90,
}

__all__ = [
    "DATABASE_URL_SCHEMES",
    "DEFAULT_NETWORK",
    "NETWORK_PASSPHRASES",
    "OPERATIONAL_DEFAULTS",
    "StellarNetwork",
    "VALID_NETWORKS",
]
