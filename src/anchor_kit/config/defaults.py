"""Fill deployment defaults into a partially specified anchor configuration."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Optional

from pydantic.alias_generators import to_camel

from ..core.errors import ConfigError
from ..utils.constants import DEFAULT_NETWORK, NETWORK_PASSPHRASES, OPERATIONAL_DEFAULTS

_UNSET = object()


def _spellings(name: str) -> tuple[str, ...]:
    camel = to_camel(name)
    return (name,) if camel == name else (name, camel)


def _explicit(section: Mapping[str, Any], name: str) -> Any:
    """Return the caller's value for ``name`` in either spelling; ``None`` counts as unset."""

    for key in _spellings(name):
        value = section.get(key)
        if value is not None:
            return value
    return _UNSET


def _assign(section: Dict[str, Any], name: str, value: Any) -> None:
    for key in _spellings(name):
        section.pop(key, None)
    section[name] = value


def default_passphrase(network: Any) -> Optional[str]:
    """Passphrase for a network identifier, or ``None`` when it is not a known network."""

    if isinstance(network, Enum):
        network = network.value
    if not isinstance(network, str):
        return None
    return NETWORK_PASSPHRASES.get(network)


def _default_network(network: Any) -> Any:
    if network is None or not isinstance(network, Mapping):
        return network
    section = dict(network)
    identifier = _explicit(section, "network")
    if identifier is _UNSET:
        identifier = DEFAULT_NETWORK.value
    elif isinstance(identifier, Enum):
        identifier = identifier.value
    passphrase = _explicit(section, "network_passphrase")
    if passphrase is _UNSET:
        passphrase = default_passphrase(identifier)
    horizon_url = _explicit(section, "horizon_url")
    _assign(section, "network", identifier)
    _assign(section, "network_passphrase", passphrase)
    _assign(section, "horizon_url", None if horizon_url is _UNSET else horizon_url)
    return section


def _default_operational(operational: Any) -> Any:
    if operational is None:
        operational = {}
    if not isinstance(operational, Mapping):
        return operational
    section = dict(operational)
    for name, fallback in OPERATIONAL_DEFAULTS.items():
        value = _explicit(section, name)
        _assign(section, name, fallback if value is _UNSET else value)
    return section


def apply_defaults(payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a new mapping with the network and operational sections defaulted.

    The input is never mutated and explicitly supplied values always win,
    falsy ones included. A ``network`` key that is absent (or ``None``) stays
    absent so validation can report it. Every other section is passed through
    untouched.
    """

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ConfigError(
            "Configuration input must be a mapping",
            {"field": "configuration", "type": type(payload).__name__},
        )
    resolved: Dict[str, Any] = dict(payload)
    resolved["network"] = _default_network(payload.get("network"))
    resolved["operational"] = _default_operational(payload.get("operational"))
    return resolved


__all__ = ["apply_defaults", "default_passphrase"]
