"""Pure serialization helpers for slider configuration files."""

from __future__ import annotations

import json
import os
from dataclasses import asdict
from typing import Any, Dict

from models.errors import ConfigurationError
from models.slider_model import Orientation, SliderConfig


DEFAULT_CONFIG: Dict[str, Any] = {
    "minimum": 0.0,
    "maximum": 100.0,
    "step": 1.0,
    "min_distance": 0.0,
    "pearling": False,
    "invert": False,
    "orientation": Orientation.HORIZONTAL.value,
    "disabled": False,
    "snap_drag_disabled": False,
    "page_multiplier": 10,
}

# Short names used by hand-written config files
_ALIASES = {
    "min": "minimum",
    "max": "maximum",
    "minDistance": "min_distance",
    "snapDragDisabled": "snap_drag_disabled",
}

_FLOAT_KEYS = ("minimum", "maximum", "step", "min_distance")
_BOOL_KEYS = ("pearling", "invert", "disabled", "snap_drag_disabled")


def config_from_dict(data: Dict[str, Any]) -> SliderConfig:
    """Build a SliderConfig from a JSON object, merging onto the defaults.

    Unknown keys are ignored; malformed values raise ConfigurationError.
    """
    merged = DEFAULT_CONFIG.copy()
    for key, value in (data or {}).items():
        key = _ALIASES.get(key, key)
        if key in merged:
            merged[key] = value

    try:
        for key in _FLOAT_KEYS:
            merged[key] = float(merged[key])
        merged["page_multiplier"] = int(merged["page_multiplier"])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid numeric config value: {exc}") from exc
    for key in _BOOL_KEYS:
        merged[key] = bool(merged[key])

    return SliderConfig(**merged)


def config_to_dict(config: SliderConfig) -> Dict[str, Any]:
    data = asdict(config)
    data["orientation"] = config.orientation.value
    return data


def load_config(file_path: str) -> SliderConfig:
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path}: expected a JSON object")
    return config_from_dict(data)


def save_config(config: SliderConfig, file_path: str) -> str:
    directory = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(directory, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(config_to_dict(config), f, indent=2)
    return file_path
