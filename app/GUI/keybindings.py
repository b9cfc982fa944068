"""
keybindings.py - Menu shortcuts for the text annotator.

Stores default bindings and user overrides in a JSON config file.
"""

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Default keybindings: action_name -> shortcut string
DEFAULTS = {
    # File
    "file.exit": "Ctrl+Q",
    # Edit
    "edit.undo": "Ctrl+Z",
    "edit.redo": "Ctrl+Shift+Z",
    "edit.delete": "Del",
    "edit.add_text": "Ctrl+T",
    # Format
    "format.bold": "Ctrl+B",
    "format.italic": "Ctrl+I",
    "format.underline": "Ctrl+U",
    "format.align": "Ctrl+L",
    "format.font_bigger": "Ctrl+=",
    "format.font_smaller": "Ctrl+-",
}

# Human-readable labels for each action
ACTION_LABELS = {
    "file.exit": "Exit",
    "edit.undo": "Undo",
    "edit.redo": "Redo",
    "edit.delete": "Delete Selected",
    "edit.add_text": "Add Text",
    "format.bold": "Bold",
    "format.italic": "Italic",
    "format.underline": "Underline",
    "format.align": "Cycle Alignment",
    "format.font_bigger": "Increase Font Size",
    "format.font_smaller": "Decrease Font Size",
}

_CONFIG_DIR = Path.home() / ".text-annotator"
_CONFIG_FILE = _CONFIG_DIR / "keybindings.json"

MENU_ORDER = ("file", "edit", "format")


def menu_of(action_name: str) -> str:
    """Return the menu prefix of an action, e.g. ``"format"``."""
    return action_name.split(".", 1)[0]


class KeybindingsRegistry:
    """
    Shortcut table for the annotator's menu actions.

    Overrides are read once at construction. Values that are not strings,
    and actions the editor does not define, are skipped with a warning.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._bindings: dict[str, str] = dict(DEFAULTS)
        self._config_path = Path(config_path) if config_path else _CONFIG_FILE
        self.load()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def get(self, action_name: str) -> str:
        return self._bindings.get(action_name, "")

    def set(self, action_name: str, shortcut: str) -> None:
        if action_name not in DEFAULTS:
            raise KeyError(f"Unknown action: {action_name}")
        self._bindings[action_name] = shortcut

    def label(self, action_name: str) -> str:
        return ACTION_LABELS.get(action_name, action_name)

    def get_all(self) -> dict[str, str]:
        return dict(self._bindings)

    def actions_for_menu(self, menu: str) -> list[str]:
        """Action names belonging to *menu*, in declaration order."""
        return [name for name in DEFAULTS if menu_of(name) == menu]

    def get_conflicts(self) -> list[tuple[str, list[str]]]:
        """Return (shortcut, actions) pairs where one shortcut is bound twice."""
        by_shortcut: dict[str, list[str]] = {}
        for action, shortcut in self._bindings.items():
            if shortcut:
                by_shortcut.setdefault(shortcut.lower(), []).append(action)
        return [(s, names) for s, names in by_shortcut.items() if len(names) > 1]

    def reset_defaults(self) -> None:
        self._bindings = dict(DEFAULTS)

    def save(self) -> None:
        """Write bindings that differ from the defaults."""
        overrides = {k: v for k, v in self._bindings.items() if v != DEFAULTS[k]}
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, "w", encoding="utf-8") as f:
                json.dump(overrides, f, indent=2)
        except OSError as e:
            logger.error("Failed to save keybindings: %s", e)

    def load(self) -> None:
        if not self._config_path.exists():
            return
        try:
            with open(self._config_path, encoding="utf-8") as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load keybindings config: %s", e)
            return
        if not isinstance(overrides, dict):
            logger.warning("Ignoring keybindings config %s: expected a JSON object",
                           self._config_path)
            return
        for action, shortcut in overrides.items():
            if action not in DEFAULTS:
                logger.warning("Ignoring binding for unknown action: %s", action)
            elif not isinstance(shortcut, str):
                logger.warning("Ignoring non-string shortcut for %s", action)
            else:
                self._bindings[action] = shortcut
