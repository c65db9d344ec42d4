from __future__ import annotations

from typing import Any, Dict

import pytest

from anchor_kit.config.settings import get_runtime_settings
from anchor_kit.monitoring.logger import configure_logging

USDC_ISSUER = "GBBD47IF6LWK7P7MDEVSCWR7DPUWV3NY3DTQEVFL4NAT4AQH3ZLLFLA5"


@pytest.fixture(autouse=True)
def _reset_runtime_state(monkeypatch: pytest.MonkeyPatch):
    for name in ("ANCHOR_KIT_ENV", "ANCHOR_KIT_LOG_LEVEL", "ANCHOR_KIT_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_runtime_settings.cache_clear()
    yield
    get_runtime_settings.cache_clear()
    # Tests may point the root handler at a capture stream or a temp file.
    configure_logging(force=True)


@pytest.fixture
def valid_payload() -> Dict[str, Any]:
    return {
        "network": {"network": "testnet"},
        "server": {"port": 3000},
        "security": {
            "sep10SigningKey": "secret-key-10",
            "interactiveJwtSecret": "jwt-secret",
            "distributionAccountSecret": "dist-secret",
        },
        "assets": {
            "assets": [
                {"code": "USDC", "issuer": USDC_ISSUER},
            ],
        },
        "framework": {
            "database": {
                "provider": "postgres",
                "url": "postgresql://localhost:5432/anchor",
            },
        },
    }
