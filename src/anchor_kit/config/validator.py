"""Ordered, fail-fast checks over a resolved anchor configuration."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import AnyHttpUrl, AnyUrl, BaseModel, SecretStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ConfigError
from ..utils.constants import DATABASE_URL_SCHEMES, VALID_NETWORKS
from .models import AnchorKitConfig

_HTTP_URL = TypeAdapter(AnyHttpUrl)
_ANY_URL = TypeAdapter(AnyUrl)

REQUIRED_SECTIONS = ("network", "server", "security", "assets", "framework")
REQUIRED_SECRETS = (
    ("sep10_signing_key", "sep10SigningKey"),
    ("interactive_jwt_secret", "interactiveJwtSecret"),
    ("distribution_account_secret", "distributionAccountSecret"),
)


def is_http_url(value: Any) -> bool:
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def is_database_url(value: Any) -> bool:
    """Accept known driver schemes or any absolute URI; file paths need ``file:``."""

    if not value or not isinstance(value, str):
        return False
    if value.startswith(DATABASE_URL_SCHEMES):
        return True
    try:
        _ANY_URL.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def _secret_value(secret: Any) -> Any:
    if isinstance(secret, SecretStr):
        return secret.get_secret_value()
    return secret


def _field(section: Any, name: str) -> Any:
    """Attribute of a resolved section; ``None`` when the section kept a raw value."""

    if isinstance(section, BaseModel):
        return getattr(section, name)
    return None


def _absent(value: Any) -> bool:
    """``None``, ``False``, zero and the empty string count as not supplied."""

    if value is None:
        return True
    if isinstance(value, (str, int, float, Decimal)):
        return not value
    return False


def validate_config(config: Optional[AnchorKitConfig]) -> None:
    """Raise ``ConfigError`` for the first violated invariant.

    Checks run in a fixed order and later ones rely on earlier ones having
    passed (the database url check assumes ``framework.database`` exists).
    Values of any type are accepted; a wrong type is reported by the check
    that owns the field.
    """

    if config is None:
        raise ConfigError("Configuration object is missing", {"field": "configuration"})

    for section in REQUIRED_SECTIONS:
        if _absent(getattr(config, section)):
            raise ConfigError(f"Missing required top-level field: {section}", {"field": section})

    network = config.network
    server = config.server
    security = config.security
    assets = config.assets
    framework = config.framework

    for attribute, wire_name in REQUIRED_SECRETS:
        if _absent(_secret_value(_field(security, attribute))):
            raise ConfigError(
                f"Missing required secret: security.{wire_name}",
                {"field": f"security.{wire_name}"},
            )

    configured_assets = _field(assets, "assets")
    if not isinstance(configured_assets, tuple) or not configured_assets:
        raise ConfigError(
            "At least one asset must be configured in assets.assets",
            {"field": "assets.assets"},
        )

    database = _field(framework, "database")
    database_url = _field(database, "url")
    if _absent(database) or _absent(_field(database, "provider")) or _absent(database_url):
        raise ConfigError(
            "Missing required database configuration in framework.database",
            {"field": "framework.database"},
        )

    if not is_database_url(database_url):
        raise ConfigError("Invalid database URL format", {"field": "framework.database.url"})

    urls = (
        ("server.interactiveDomain", _field(server, "interactive_domain")),
        ("network.horizonUrl", _field(network, "horizon_url")),
        ("metadata.tomlUrl", _field(config.metadata, "toml_url")),
    )
    for path, url in urls:
        if not _absent(url) and not is_http_url(url):
            raise ConfigError(f"Invalid URL format for {path}", {"field": path, "value": url})

    identifier = _field(network, "network")
    if not isinstance(identifier, str) or identifier not in VALID_NETWORKS:
        raise ConfigError(
            f"Invalid network: {identifier}. Must be one of: {', '.join(VALID_NETWORKS)}",
            {"field": "network.network", "value": identifier},
        )


__all__ = ["REQUIRED_SECTIONS", "is_database_url", "is_http_url", "validate_config"]
