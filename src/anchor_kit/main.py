"""Command line entrypoint for checking an anchor configuration file."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .config.manager import AnchorConfig
from .core.errors import AnchorKitError, ConfigError
from .monitoring import bootstrap_observability
from .monitoring.logger import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1


def load_payload(path: Path) -> Dict[str, Any]:
    """Decode a TOML or JSON configuration file into a plain mapping."""

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}", {"field": "configuration", "path": str(path)})
    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(path.read_text(encoding="utf-8"))
        else:
            with path.open("rb") as handle:
                payload = tomllib.load(handle)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(
            f"Unable to parse configuration file {path.name}: {exc}",
            {"field": "configuration", "path": str(path)},
        ) from exc
    if not isinstance(payload, dict):
        raise ConfigError("Configuration input must be a mapping", {"field": "configuration", "path": str(path)})
    return payload


def check(path: Path) -> int:
    try:
        config = AnchorConfig(load_payload(path))
        bootstrap_observability(config.get("framework"))
        config.validate()
    except AnchorKitError as exc:
        print(json.dumps(exc.to_dict(), default=str), file=sys.stderr)
        return EXIT_INVALID
    assets = config.get("assets")
    count = len(assets.assets) if assets and assets.assets else 0
    print(f"{path}: ok (network={config.get('network').network}, assets={count})")
    logger.info("Configuration check passed", extra={"path": str(path), "assets": count})
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Validate an anchor configuration before deploying it")
    subparsers = parser.add_subparsers(dest="command", required=True)
    check_parser = subparsers.add_parser("check", help="Apply defaults and validate a TOML or JSON config file")
    check_parser.add_argument("path", type=Path, help="Path to the configuration file")
    args = parser.parse_args(argv)
    configure_logging()
    if args.command == "check":
        return check(args.path)
    parser.error(f"Unknown command: {args.command}")
    return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
