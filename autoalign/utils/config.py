"""Serialization utilities for run configuration (load and save)."""

from __future__ import annotations

from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from autoalign.types import AutoalignConfig


def config_to_dict(config: AutoalignConfig) -> Dict[str, Any]:
    """Convert an AutoalignConfig into a plain dictionary suitable for YAML."""
    return asdict(config)


def config_from_dict(payload: Dict[str, Any]) -> AutoalignConfig:
    """Build an AutoalignConfig, rejecting keys it does not define."""
    known = {field.name for field in fields(AutoalignConfig)}
    unexpected = [key for key in payload if key not in known]
    if unexpected:
        raise ValueError(f"config has unexpected keys: {unexpected}")
    return AutoalignConfig(**payload)


def load_config(yaml_path: Path) -> AutoalignConfig:
    """Load an AutoalignConfig from a YAML file.

    The settings may sit at the top level or under an ``autoalign`` key.
    An empty file yields the defaults.
    """
    with Path(yaml_path).open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}

    if not isinstance(payload, dict):
        raise ValueError(f"Config file {yaml_path} must contain a mapping.")
    return config_from_dict(payload.get("autoalign", payload))


def save_config(config: AutoalignConfig, yaml_path: Path) -> None:
    """Write an AutoalignConfig to a YAML file."""
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    with yaml_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump({"autoalign": config_to_dict(config)}, handle, sort_keys=False)


__all__ = ["AutoalignConfig", "config_to_dict", "config_from_dict", "load_config", "save_config"]
