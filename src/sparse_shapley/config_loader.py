from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml


def load_config(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        msg = "Configuration file must contain a mapping at top level."
        raise ValueError(msg)
    input_cfg = data.get("input")
    if not isinstance(input_cfg, dict) or "path" not in input_cfg:
        msg = "Configuration must define input.path."
        raise ValueError(msg)
    return data


def section(cfg: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return a config section, treating a missing or empty one as ``{}``."""
    value = cfg.get(name) or {}
    if not isinstance(value, dict):
        msg = f"Config section '{name}' must be a mapping."
        raise ValueError(msg)
    return value
