from __future__ import annotations

"""Plan service configuration and logging setup.

Purpose: Load settings from a single JSON file (`settings/config.json`).
Environment variables are not used. Configure root logging with a concise
format.

"""

import logging
import json
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


CONFIG_PATH = Path("settings/config.json")


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    password: str
    # Resolver tuning
    max_resolve_depth: int


def load_settings(path: Optional[Path] = None) -> Settings:
    """Read `path` (default settings/config.json) into a `Settings`.

    The file must exist and carry every key; there are no defaults.
    """
    cfg_path = path or CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"{cfg_path} not found")
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise RuntimeError(f"failed to parse {cfg_path}: {e}") from e

    required_keys = [
        "host", "port", "log_level", "password",
        "max_resolve_depth",
    ]
    missing = [k for k in required_keys if k not in data]
    if missing:
        raise KeyError(f"{cfg_path} missing required keys: {', '.join(missing)}")

    max_depth = int(data["max_resolve_depth"])
    if max_depth <= 0:
        raise ValueError("max_resolve_depth must be positive")

    return Settings(
        host=str(data["host"]),
        port=int(data["port"]),
        log_level=str(data["log_level"]).upper(),
        password=str(data["password"]),
        max_resolve_depth=max_depth,
    )


def configure_logging(log_level: str) -> None:
    """Set the root level and the one-line format used by every craftplan logger."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
