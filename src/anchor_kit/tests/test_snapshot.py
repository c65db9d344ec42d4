from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict

import pytest
from pydantic import ValidationError

from anchor_kit.config.manager import AnchorConfig
from anchor_kit.config.models import NetworkConfig
from anchor_kit.config.snapshot import deep_freeze, is_frozen, thaw


def test_deep_freeze_converts_nested_containers() -> None:
    frozen = deep_freeze({"a": [1, {"b": {"c"}}], "d": "text"})

    assert isinstance(frozen, MappingProxyType)
    assert frozen["a"] == (1, MappingProxyType({"b": frozenset({"c"})}))
    assert isinstance(frozen["a"][1], MappingProxyType)
    assert frozen["d"] == "text"


def test_deep_freeze_skips_already_frozen_values() -> None:
    proxy = MappingProxyType({"a": 1})
    model = NetworkConfig(network="testnet")

    assert deep_freeze(proxy) is proxy
    assert deep_freeze(model) is model
    assert deep_freeze(42) == 42
    assert is_frozen(model)
    assert not is_frozen({"a": 1})


def test_deep_freeze_copies_instead_of_sharing() -> None:
    source = {"a": [1, 2]}
    frozen = deep_freeze(source)
    source["a"].append(3)

    assert frozen["a"] == (1, 2)


def test_thaw_restores_plain_containers() -> None:
    assert thaw(deep_freeze({"a": [1, {"b": 2}]})) == {"a": [1, {"b": 2}]}


def test_sections_reject_assignment(valid_payload: Dict[str, Any]) -> None:
    config = AnchorConfig(valid_payload)

    with pytest.raises(ValidationError):
        config.get("network").network = "public"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        config.get_config().server = None  # type: ignore[misc]
    with pytest.raises(ValidationError):
        config.get("operational").queue_backend = "redis"  # type: ignore[misc]
    assert config.get("network").network == "testnet"


def test_nested_collections_are_read_only(valid_payload: Dict[str, Any]) -> None:
    valid_payload["kycRequired"] = {"USDC": ["email"]}
    valid_payload["framework"]["plugins"] = [{"id": "audit", "config": {"sinks": ["stdout"], "opts": {"level": 1}}}]
    config = AnchorConfig(valid_payload)

    kyc_required = config.get("kycRequired")
    with pytest.raises(TypeError):
        kyc_required["NGNC"] = ["email"]  # type: ignore[index]
    with pytest.raises(TypeError):
        del kyc_required["USDC"]  # type: ignore[attr-defined]
    with pytest.raises(AttributeError):
        config.get("assets").assets.append(None)  # type: ignore[attr-defined]

    plugin_config = config.get("framework").plugins[0].config
    assert plugin_config["sinks"] == ("stdout",)
    with pytest.raises(TypeError):
        plugin_config["opts"]["level"] = 2  # type: ignore[index]
    assert config.get_kyc_required_fields("USDC") == ["email"]


def test_caller_mutations_do_not_leak_into_snapshot(valid_payload: Dict[str, Any]) -> None:
    config = AnchorConfig(valid_payload)
    valid_payload["assets"]["assets"].append({"code": "NGNC", "issuer": "GNGNC"})
    valid_payload["network"]["network"] = "public"

    assert config.get_asset("NGNC") is None
    assert config.get("network").network == "testnet"


def test_wrong_shaped_values_are_kept_read_only(valid_payload: Dict[str, Any]) -> None:
    valid_payload["assets"]["assets"] = {"code": "USDC", "tags": ["stable"]}
    valid_payload["metadata"] = ["https://anchor.example.com"]
    config = AnchorConfig(valid_payload)

    raw_assets = config.get("assets").assets
    assert isinstance(raw_assets, MappingProxyType)
    assert raw_assets["tags"] == ("stable",)
    with pytest.raises(TypeError):
        raw_assets["code"] = "NGNC"  # type: ignore[index]
    assert config.get("metadata") == ("https://anchor.example.com",)
