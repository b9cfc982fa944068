"""
editor_config.py - Editor settings with JSON overrides.

Defaults live in this module; user overrides are read from
``~/.text-annotator/config.json``. Only non-default values are written back.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from .geometry import BOX_PADDING
from .text_box import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, MIN_FONT_SIZE

logger = logging.getLogger(__name__)

DEFAULT_SURFACE_WIDTH = 300
DEFAULT_SURFACE_HEIGHT = 480

_CONFIG_DIR = Path.home() / ".text-annotator"
_CONFIG_FILE = _CONFIG_DIR / "config.json"


@dataclass
class EditorConfig:
    """Tunable constants consumed by the editor core."""

    surface_width: int = DEFAULT_SURFACE_WIDTH
    surface_height: int = DEFAULT_SURFACE_HEIGHT
    box_padding: float = float(BOX_PADDING)
    default_position: tuple[float, float] = (50.0, 50.0)
    default_font_family: str = DEFAULT_FONT_FAMILY
    default_font_size: int = DEFAULT_FONT_SIZE
    min_font_size: int = MIN_FONT_SIZE
    double_activate_ms: float = 300.0
    history_max_depth: int = 100

    def to_dict(self) -> dict:
        data = asdict(self)
        data["default_position"] = list(self.default_position)
        return data


def _coerce(name: str, value, default):
    """Validate an override against the type of its default value."""
    if isinstance(default, tuple):
        if (isinstance(value, (list, tuple)) and len(value) == len(default)
                and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)):
            return tuple(float(v) for v in value)
        raise TypeError(f"{name} must be a pair of numbers")
    if isinstance(default, bool) or isinstance(value, bool):
        raise TypeError(f"{name} must not be a boolean")
    if isinstance(default, int):
        if isinstance(value, int):
            return value
        raise TypeError(f"{name} must be an integer")
    if isinstance(default, float):
        if isinstance(value, (int, float)):
            return float(value)
        raise TypeError(f"{name} must be a number")
    if isinstance(default, str):
        if isinstance(value, str):
            return value
        raise TypeError(f"{name} must be a string")
    return value


def load_config(config_path: Optional[Path] = None) -> EditorConfig:
    """Return the default config overlaid with overrides from *config_path*."""
    config = EditorConfig()
    path = Path(config_path) if config_path else _CONFIG_FILE
    if not path.exists():
        return config
    try:
        with open(path, encoding="utf-8") as f:
            overrides = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to load editor config %s: %s", path, e)
        return config
    if not isinstance(overrides, dict):
        logger.warning("Ignoring editor config %s: expected a JSON object", path)
        return config

    known = {f.name for f in fields(EditorConfig)}
    for key, value in overrides.items():
        if key not in known:
            logger.warning("Ignoring unknown editor config key: %s", key)
            continue
        try:
            setattr(config, key, _coerce(key, value, getattr(config, key)))
        except TypeError as e:
            logger.warning("Ignoring editor config value: %s", e)
    return config


def save_config(config: EditorConfig, config_path: Optional[Path] = None) -> None:
    """Write the values of *config* that differ from the defaults."""
    path = Path(config_path) if config_path else _CONFIG_FILE
    defaults = EditorConfig().to_dict()
    overrides = {k: v for k, v in config.to_dict().items() if v != defaults.get(k)}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(overrides, f, indent=2)
    except OSError as e:
        logger.error("Failed to save editor config: %s", e)
