from __future__ import annotations

import copy
import logging
import os
from functools import lru_cache
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

SETTINGS_ENV = "STACK_SOLVER_SETTINGS"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "segment_palette": [
        "#1f6feb",
        "#d83b7d",
        "#2da44e",
        "#bf8700",
        "#8250df",
        "#0a7ea4",
        "#cf222e",
        "#6e7781",
    ],
    "footprint_tolerance": 1e-6,
    "solution_dir": os.path.join("data", "solutions"),
}


def settings_path() -> str:
    env_path = os.getenv(SETTINGS_ENV)
    if env_path:
        return os.path.expanduser(env_path)
    return os.path.join(os.path.dirname(__file__), "settings.yaml")


def _coerce(key: str, value: Any) -> Any:
    default = DEFAULT_SETTINGS[key]
    if isinstance(default, list):
        if not isinstance(value, list) or not value:
            raise TypeError(f"{key} must be a non-empty list")
        return [str(item) for item in value]
    if isinstance(default, float):
        if isinstance(value, bool):
            raise TypeError(f"{key} must be a number")
        return float(value)
    return str(value)


@lru_cache(maxsize=None)
def _load_settings() -> Dict[str, Any]:
    path = settings_path()
    data: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if isinstance(loaded, dict):
            data = loaded
        else:
            logger.warning("Ignoring settings file %s: expected a mapping", path)

    settings = copy.deepcopy(DEFAULT_SETTINGS)
    for key in DEFAULT_SETTINGS:
        if key not in data:
            continue
        try:
            settings[key] = _coerce(key, data[key])
        except (TypeError, ValueError):
            logger.warning("Invalid value for %r in %s, using default", key, path)
    return settings


def load_settings() -> Dict[str, Any]:
    """Load solver settings from ``settings.yaml`` merged over the defaults.

    The file is read once; each call gets its own copy.
    """
    return copy.deepcopy(_load_settings())


def clear_settings_cache() -> None:
    _load_settings.cache_clear()


def segment_palette() -> list[str]:
    return list(load_settings()["segment_palette"])


def footprint_tolerance() -> float:
    return float(load_settings()["footprint_tolerance"])
