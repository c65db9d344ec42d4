"""Central configuration manager for an anchor deployment."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..core.errors import ConfigError
from ..monitoring.logger import get_logger
from .defaults import apply_defaults, default_passphrase
from .models import AnchorKitConfig, Asset, AssetsConfig, NetworkConfig, section_value
from .snapshot import snapshot
from .validator import validate_config

logger = get_logger(__name__)


class AnchorConfig:
    """Defaulted, frozen view over a partially specified anchor configuration.

    Construction applies defaults and freezes the result; it does not
    validate. Call :meth:`validate` before trusting the configuration. The
    instance never changes after construction, so it can be shared freely
    between threads; build a new one to change configuration.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        resolved = apply_defaults(config)
        self._config: AnchorKitConfig = snapshot(resolved, AnchorKitConfig)
        logger.debug(
            "Anchor configuration loaded",
            extra={
                "sections": [name for name, value in self._config if value is not None],
                "network": self._network_id(),
            },
        )

    def _network_id(self) -> Any:
        network = self._config.network
        return network.network if isinstance(network, NetworkConfig) else None

    def get(self, section: str) -> Any:
        """Return one top-level section (``None`` when it was never supplied)."""

        return section_value(self._config, section)

    def get_config(self) -> AnchorKitConfig:
        return self._config

    def to_dict(self, *, by_alias: bool = True) -> Dict[str, Any]:
        """Plain JSON-compatible copy of the configuration; secrets stay masked."""

        return self._config.model_dump(mode="json", by_alias=by_alias, exclude_none=True)

    def get_asset(self, code: str) -> Optional[Asset]:
        """Return the first configured asset whose code matches exactly (case-sensitive)."""

        assets = self._config.assets
        if not isinstance(assets, AssetsConfig) or not isinstance(assets.assets, tuple):
            return None
        for asset in assets.assets:
            if isinstance(asset, Asset) and asset.code == code:
                return asset
        return None

    def get_kyc_required_fields(self, code: str) -> List[str]:
        """Required KYC field names for an asset; empty when no policy applies."""

        policy = self._config.kyc_required
        if not isinstance(policy, Mapping):
            return []
        fields = policy.get(code)
        if not fields:
            return []
        return list(fields)

    def is_network_passphrase(self, passphrase: str) -> bool:
        network = self._config.network
        if not isinstance(network, NetworkConfig):
            return False
        if network.network_passphrase:
            return passphrase == network.network_passphrase
        expected = default_passphrase(network.network)
        if expected is None:
            return False
        return passphrase == expected

    def validate(self) -> None:
        """Raise ``ConfigError`` on the first invalid or missing setting."""

        try:
            validate_config(self._config)
        except ConfigError as exc:
            logger.warning(
                "Anchor configuration rejected: %s",
                exc.message,
                extra={"field": (exc.context or {}).get("field")},
            )
            raise

    def __repr__(self) -> str:
        return f"AnchorConfig(network={self._network_id()!r})"


__all__ = ["AnchorConfig"]
