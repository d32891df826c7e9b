from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict


DEFAULT_CONFIG_PATH = Path("config.toml")


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the unified application config (config.toml by default).

    ``RAN_BOT_CONFIG`` overrides the default location. Returns an empty dict
    when the file is missing so callers can fall back to environment variables.
    """
    if path is None:
        path = os.getenv("RAN_BOT_CONFIG") or DEFAULT_CONFIG_PATH
    target = Path(path)
    if not target.is_file():
        return {}

    with target.open("rb") as handle:
        return tomllib.load(handle)


def env_flag(name: str, default: str = "0") -> bool:
    """Interpret an environment variable as a boolean switch."""
    return os.getenv(name, default).lower() in ("1", "true", "yes")


__all__ = ["load_raw_config", "env_flag", "DEFAULT_CONFIG_PATH"]
