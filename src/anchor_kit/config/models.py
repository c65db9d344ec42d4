"""Resolved (post-defaulting) configuration shapes for an anchor deployment."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, Optional, Tuple

from pydantic import (
    AfterValidator,
    BaseModel,
    Field,
    PlainSerializer,
    SecretStr,
    SerializerFunctionWrapHandler,
    WrapSerializer,
)

from .snapshot import DumpUnshaped, FrozenMapping, FrozenModel, FrozenValue, deep_freeze, keep_unshaped, thaw


class KycLevel(str, Enum):
    """KYC enforcement levels."""

    NONE = "none"
    BASIC = "basic"
    STRICT = "strict"


class QueueBackend(str, Enum):
    """Background job queue backends."""

    MEMORY = "memory"
    REDIS = "redis"
    POSTGRES = "postgres"


KycRequiredMap = Annotated[
    Dict[str, Tuple[str, ...]],
    AfterValidator(deep_freeze),
    PlainSerializer(thaw),
]

AssetMapping = Annotated[
    Dict[str, str],
    AfterValidator(deep_freeze),
    PlainSerializer(thaw),
]

# Sections and nested objects whose shape is the validator's concern.
_SECTION = keep_unshaped(Mapping, BaseModel)


class NetworkConfig(FrozenModel):
    """Stellar network selection and connection settings."""

    network: FrozenValue = None
    horizon_url: FrozenValue = None
    network_passphrase: FrozenValue = None


class ServerConfig(FrozenModel):
    """HTTP server and hosting settings."""

    host: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=0, le=65535)
    debug: Optional[bool] = None
    interactive_domain: FrozenValue = None
    cors_origins: Optional[Tuple[str, ...]] = None
    request_timeout: Optional[int] = Field(default=None, ge=0)


def _dump_secret(value: Any, handler: SerializerFunctionWrapHandler) -> Any:
    if value is None or isinstance(value, SecretStr):
        return handler(value)
    return "**********" if value else thaw(value)


# Non-string secrets are kept as given and masked when dumped.
Secret = Annotated[SecretStr, keep_unshaped(str, SecretStr), WrapSerializer(_dump_secret)]


class SecurityConfig(FrozenModel):
    """Signing keys and secrets; never defaulted."""

    sep10_signing_key: Optional[Secret] = None
    interactive_jwt_secret: Optional[Secret] = None
    distribution_account_secret: Optional[Secret] = None
    challenge_expiration_seconds: Optional[int] = Field(default=None, ge=0)
    enable_client_attribution: Optional[bool] = None
    webhook_secret: Optional[Secret] = None
    verify_webhook_signatures: Optional[bool] = None


class Asset(FrozenModel):
    """A Stellar asset the anchor issues or distributes."""

    code: FrozenValue = None
    issuer: FrozenValue = None
    name: Optional[str] = None
    deposits_enabled: Optional[bool] = None
    withdrawals_enabled: Optional[bool] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None


AssetEntry = Annotated[Asset, _SECTION, DumpUnshaped]


class AssetsConfig(FrozenModel):
    """Supported assets, in declaration order."""

    assets: Annotated[Optional[Tuple[AssetEntry, ...]], keep_unshaped(list, tuple), DumpUnshaped] = None
    default_currency: Optional[str] = None
    asset_mapping: Optional[AssetMapping] = None


class KycConfig(FrozenModel):
    """Customer verification settings."""

    level: Optional[KycLevel] = None
    require_documents: Optional[bool] = None
    require_name: Optional[bool] = None
    require_address: Optional[bool] = None
    require_email: Optional[bool] = None
    require_phone_number: Optional[bool] = None
    require_birth_date: Optional[bool] = None
    max_age: Optional[int] = Field(default=None, ge=0)
    min_age: Optional[int] = Field(default=None, ge=0)


class OperationalAddress(FrozenModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class OperationalConfig(FrozenModel):
    """Deployment metadata; always present after defaulting."""

    name: Optional[str] = None
    website: Optional[str] = None
    support_email: Optional[str] = None
    address: Optional[OperationalAddress] = None
    webhooks_enabled: Optional[bool] = None
    queue_backend: Optional[QueueBackend] = None
    redis_url: Optional[str] = None
    cors_enabled: Optional[bool] = None
    transaction_retention_days: Optional[int] = Field(default=None, ge=0)


class ProtocolsConfig(FrozenModel):
    sep10: Optional[bool] = None
    sep24: Optional[bool] = None
    sep6: Optional[bool] = None
    sep31: Optional[bool] = None


class FeaturesConfig(FrozenModel):
    supports_interactive_deposits: Optional[bool] = None
    supports_interactive_withdrawals: Optional[bool] = None
    supports_async_transaction_status: Optional[bool] = None


class DocumentationUrls(FrozenModel):
    api_docs: Optional[str] = None
    support: Optional[str] = None
    terms: Optional[str] = None


class MetadataConfig(FrozenModel):
    """SEP-1 info and protocol metadata."""

    toml_url: FrozenValue = None
    protocols: Optional[ProtocolsConfig] = None
    features: Optional[FeaturesConfig] = None
    documentation_urls: Optional[DocumentationUrls] = None


class DatabaseConfig(FrozenModel):
    """Persistent storage adapter; provider and url are checked by the validator."""

    provider: FrozenValue = None
    url: FrozenValue = None
    schema_name: Optional[str] = Field(default=None, alias="schema")


class PluginConfig(FrozenModel):
    id: str
    config: Optional[FrozenMapping] = None


class LoggingConfig(FrozenModel):
    """Log level and format requested by the deployment."""

    level: Optional[str] = None
    format: Optional[str] = None
    file: Optional[str] = None


class MonitoringConfig(FrozenModel):
    sentry_dsn: Optional[str] = None
    otlp_endpoint: Optional[str] = None
    metrics_enabled: Optional[bool] = None


class FrameworkConfig(FrozenModel):
    """SDK behaviour and integrations."""

    database: Annotated[Optional[DatabaseConfig], _SECTION, DumpUnshaped] = None
    plugins: Optional[Tuple[PluginConfig, ...]] = None
    logging: Optional[LoggingConfig] = None
    monitoring: Optional[MonitoringConfig] = None


class AnchorKitConfig(FrozenModel):
    """Complete, frozen anchor configuration.

    Sections the validator requires (network, server, security, assets,
    framework) stay ``None`` when the caller omitted them so that
    ``AnchorConfig.validate`` can name the missing one. A section (or asset
    list, asset entry, secret) of the wrong outer shape is kept as a frozen
    raw value instead of failing construction.
    """

    network: Annotated[Optional[NetworkConfig], _SECTION, DumpUnshaped] = None
    server: Annotated[Optional[ServerConfig], _SECTION, DumpUnshaped] = None
    security: Annotated[Optional[SecurityConfig], _SECTION, DumpUnshaped] = None
    assets: Annotated[Optional[AssetsConfig], _SECTION, DumpUnshaped] = None
    kyc: Annotated[Optional[KycConfig], _SECTION, DumpUnshaped] = None
    kyc_required: Annotated[Optional[KycRequiredMap], keep_unshaped(Mapping)] = None
    operational: Annotated[Optional[OperationalConfig], _SECTION, DumpUnshaped] = None
    metadata: Annotated[Optional[MetadataConfig], _SECTION, DumpUnshaped] = None
    framework: Annotated[Optional[FrameworkConfig], _SECTION, DumpUnshaped] = None


SECTION_NAMES: Tuple[str, ...] = tuple(AnchorKitConfig.model_fields)


def section_field_name(name: str) -> Optional[str]:
    """Map a section name in either spelling (``kycRequired``/``kyc_required``) to its field."""

    for field_name, info in AnchorKitConfig.model_fields.items():
        if name == field_name or name == info.alias:
            return field_name
    return None


def section_value(config: AnchorKitConfig, name: str) -> Any:
    field_name = section_field_name(name)
    if field_name is None:
        raise KeyError(f"Unknown configuration section: {name}")
    return getattr(config, field_name)


__all__ = [
    "AnchorKitConfig",
    "Asset",
    "AssetsConfig",
    "DatabaseConfig",
    "DocumentationUrls",
    "FeaturesConfig",
    "FrameworkConfig",
    "KycConfig",
    "KycLevel",
    "LoggingConfig",
    "MetadataConfig",
    "MonitoringConfig",
    "NetworkConfig",
    "OperationalAddress",
    "OperationalConfig",
    "PluginConfig",
    "ProtocolsConfig",
    "QueueBackend",
    "SECTION_NAMES",
    "SecurityConfig",
    "ServerConfig",
    "section_field_name",
    "section_value",
]
