from __future__ import annotations

import json
from pathlib import Path

import pytest

from anchor_kit.core.errors import ConfigError
from anchor_kit.main import EXIT_INVALID, EXIT_OK, load_payload, main

VALID_TOML = """
[network]
network = "testnet"

[server]
port = 3000

[security]
sep10SigningKey = "secret-key-10"
interactiveJwtSecret = "jwt-secret"
distributionAccountSecret = "dist-secret"

[[assets.assets]]
code = "USDC"
issuer = "GBBD47IF6LWK7P7MDEVSCWR7DPUWV3NY3DTQEVFL4NAT4AQH3ZLLFLA5"

[framework.database]
provider = "postgres"
url = "postgresql://localhost:5432/anchor"

[framework.logging]
level = "error"
"""


def test_check_valid_toml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "anchor.toml"
    config_path.write_text(VALID_TOML)

    assert main(["check", str(config_path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "ok (network=testnet, assets=1)" in out


def test_check_reports_first_error_as_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "anchor.json"
    config_path.write_text(json.dumps({"network": {"network": "testnet"}, "server": {}}))

    assert main(["check", str(config_path)]) == EXIT_INVALID
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert err == {"error": "INVALID_CONFIG", "message": "Missing required top-level field: security"}


def test_check_includes_context_in_development(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    from anchor_kit.config.settings import get_runtime_settings

    monkeypatch.setenv("ANCHOR_KIT_ENV", "development")
    get_runtime_settings.cache_clear()
    config_path = tmp_path / "anchor.toml"
    config_path.write_text(VALID_TOML.replace('network = "testnet"', 'network = "devnet"'))

    assert main(["check", str(config_path)]) == EXIT_INVALID
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert err["message"].startswith("Invalid network: devnet")
    assert err["context"] == {"field": "network.network", "value": "devnet"}


def test_check_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", str(tmp_path / "missing.toml")]) == EXIT_INVALID
    assert "Configuration file not found" in capsys.readouterr().err


def test_load_payload_rejects_broken_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "anchor.toml"
    config_path.write_text("[network\nnetwork = ")

    with pytest.raises(ConfigError, match="Unable to parse configuration file"):
        load_payload(config_path)


def test_load_payload_rejects_non_mapping_json(tmp_path: Path) -> None:
    config_path = tmp_path / "anchor.json"
    config_path.write_text("[1, 2, 3]")

    with pytest.raises(ConfigError, match="must be a mapping"):
        load_payload(config_path)
