"""Navigator options loaded from the user's JSON config.

The config file is read defensively: a missing, unreadable, or malformed file
and wrongly-typed values all fall back to defaults instead of raising.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazynav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class NavigatorConfig:
    hide_dotfiles: bool = False
    hide_ignored_files: bool = True
    remove_ignored_files: bool = False
    label_ignored_files: bool = True
    ignore_file_types: tuple[str, ...] = (".gitignore",)
    always_show: tuple[str, ...] = field(default_factory=tuple)
    search_tool: str = "rg"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object, or ``{}`` when unusable."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _str_tuple(data: dict[str, object], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list):
        return default
    return tuple(item for item in value if isinstance(item, str) and item)


def load_navigator_config() -> NavigatorConfig:
    data = load_config()
    defaults = NavigatorConfig()
    search_tool = data.get("search_tool")
    if not isinstance(search_tool, str) or not search_tool.strip():
        search_tool = defaults.search_tool
    return NavigatorConfig(
        hide_dotfiles=_bool(data, "hide_dotfiles", defaults.hide_dotfiles),
        hide_ignored_files=_bool(data, "hide_ignored_files", defaults.hide_ignored_files),
        remove_ignored_files=_bool(data, "remove_ignored_files", defaults.remove_ignored_files),
        label_ignored_files=_bool(data, "label_ignored_files", defaults.label_ignored_files),
        ignore_file_types=_str_tuple(data, "ignore_file_types", defaults.ignore_file_types),
        always_show=_str_tuple(data, "always_show", defaults.always_show),
        search_tool=search_tool.strip(),
    )
