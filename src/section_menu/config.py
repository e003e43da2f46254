"""YAML-based configuration for section_menu.

Defaults are deep-merged with ``~/.config/section-menu/config.yaml`` (or an
explicit path) and then with environment overrides:

- SECTION_MENU_THEME: theme preset name
- SECTION_MENU_WIDTH: maximum content width
- SECTION_MENU_PAGE_SIZE: items per page

Example config.yaml:

    theme: modern
    layout:
      preset: comfortable
      items_per_page: 8
    text:
      section_selection_title: Settings
    keys:
      vim: true
      shortcuts:
        s: Save configuration
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .themes import DEFAULT_THEME, Theme, get_theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry settings.

    Raises:
        ValueError: If items_per_page is less than 1.
    """

    center_horizontally: bool = True
    center_vertically: bool = True
    min_content_width: int = 40
    max_content_width: int = 80
    vertical_padding: int = 1
    auto_resize_content: bool = True
    show_borders: bool = True
    items_per_page: int = 10

    def __post_init__(self):
        if self.items_per_page < 1:
            raise ValueError(f"items_per_page must be positive, got {self.items_per_page}")


@dataclass(frozen=True)
class TextConfig:
    """User-facing strings and what parts of the footer to show."""

    section_selection_title: str = "Select a Section"
    item_selection_prefix: str = "Section: "
    empty_section_message: str = "No items in this section"
    help_text_sections: str = "↑↓ navigate • Enter select • 1-9 jump • q quit"
    help_text_items: str = "↑↓ navigate • Space toggle • ←→ page • a all • n none • b back • q quit"
    show_help_text: bool = True
    show_page_numbers: bool = True
    show_counters: bool = True


@dataclass(frozen=True)
class NavigationConfig:
    """Everything a NavigationMenu needs besides its sections."""

    theme: Theme = DEFAULT_THEME
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    text: TextConfig = field(default_factory=TextConfig)
    enable_quick_select: bool = True
    enable_vim_keys: bool = False
    custom_shortcuts: dict[str, str] = field(default_factory=dict)


LAYOUT_PRESETS: dict[str, LayoutConfig] = {
    "default": LayoutConfig(),
    "compact": LayoutConfig(
        items_per_page=25,
        show_borders=False,
        center_horizontally=False,
        center_vertically=False,
        min_content_width=40,
        max_content_width=60,
    ),
    "comfortable": LayoutConfig(
        items_per_page=15,
        show_borders=True,
        center_horizontally=False,
        center_vertically=False,
        min_content_width=60,
        max_content_width=100,
        vertical_padding=2,
    ),
    "fullscreen": LayoutConfig(
        items_per_page=30,
        show_borders=True,
        center_horizontally=False,
        center_vertically=False,
        auto_resize_content=True,
        min_content_width=80,
        max_content_width=120,
    ),
    "centered": LayoutConfig(
        center_horizontally=True,
        center_vertically=False,
        items_per_page=20,
        show_borders=True,
        min_content_width=60,
        max_content_width=80,
        vertical_padding=3,
    ),
}

DEFAULT_CONFIG: dict[str, Any] = {
    "theme": "default",
    "layout": {"preset": "default"},
    "text": {},
    "keys": {"quick_select": True, "vim": False, "shortcuts": {}},
}


def get_config_dir() -> Path:
    """Get the section-menu config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "section-menu"


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / "config.yaml"


def get_log_path() -> Path:
    """Get the path to the debug log file."""
    return get_config_dir() / "debug.log"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _matches_type(current: Any, value: Any) -> bool:
    """Check value against the type of the default it would replace."""
    if isinstance(current, bool):
        return isinstance(value, bool)
    if isinstance(current, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, str)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return the sub-mapping under key, or {} (with a warning) if it is not one."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Ignoring config section %r: expected a mapping, got %r", key, value)
        return {}
    return dict(value)


def _flag(keys: dict[str, Any], name: str, default: bool) -> bool:
    value = keys.get(name, default)
    if not isinstance(value, bool):
        logger.warning("Ignoring invalid value for keys.%s: %r", name, value)
        return default
    return value


def _coerce_fields(cls: type, values: dict[str, Any], base: Any) -> Any:
    """Build a dataclass from base, replacing only well-typed known fields."""
    known = {f.name: f for f in fields(cls)}
    updates: dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            logger.warning("Ignoring unknown %s option %r", cls.__name__, key)
            continue
        if not _matches_type(getattr(base, key), value):
            logger.warning("Ignoring invalid value for %s.%s: %r", cls.__name__, key, value)
            continue
        updates[key] = value
    try:
        return replace(base, **updates)
    except ValueError as e:
        logger.warning("Invalid %s settings (%s), using defaults", cls.__name__, e)
        return base


def _env_int(name: str) -> int | None:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return None


def config_from_dict(data: dict[str, Any]) -> NavigationConfig:
    """Turn a (merged) config mapping into a NavigationConfig."""
    theme_name = os.environ.get("SECTION_MENU_THEME") or data.get("theme")
    if theme_name is not None and not isinstance(theme_name, str):
        logger.warning("Ignoring invalid theme %r", theme_name)
        theme_name = None
    theme = get_theme(theme_name)

    layout_data = _section(data, "layout")
    preset = str(layout_data.pop("preset", "default"))
    if preset not in LAYOUT_PRESETS:
        logger.warning("Unknown layout preset %r, using default", preset)
    layout = _coerce_fields(
        LayoutConfig, layout_data, LAYOUT_PRESETS.get(preset, LAYOUT_PRESETS["default"])
    )

    width = _env_int("SECTION_MENU_WIDTH")
    if width is not None and width > 0:
        layout = replace(
            layout,
            max_content_width=width,
            min_content_width=min(layout.min_content_width, width),
        )
    page_size = _env_int("SECTION_MENU_PAGE_SIZE")
    if page_size is not None:
        if page_size > 0:
            layout = replace(layout, items_per_page=page_size)
        else:
            logger.warning("Ignoring SECTION_MENU_PAGE_SIZE=%d (must be positive)", page_size)

    text = _coerce_fields(TextConfig, _section(data, "text"), TextConfig())

    keys = _section(data, "keys")
    shortcuts = {
        str(key)[:1]: str(desc) for key, desc in _section(keys, "shortcuts").items() if key
    }

    return NavigationConfig(
        theme=theme,
        layout=layout,
        text=text,
        enable_quick_select=_flag(keys, "quick_select", True),
        enable_vim_keys=_flag(keys, "vim", False),
        custom_shortcuts=shortcuts,
    )


def load_config(path: Path | None = None) -> NavigationConfig:
    """Load config.yaml (or path) merged over defaults.

    A missing file yields the defaults; an unreadable or malformed file is
    logged and also yields the defaults.
    """
    config_path = path or get_config_path()
    data = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(config_path) as f:
            loaded = yaml.safe_load(f)
        if isinstance(loaded, dict):
            data = _deep_merge(data, loaded)
        elif loaded is not None:
            logger.warning("Config %s is not a mapping, using defaults", config_path)
    except FileNotFoundError:
        pass
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not read config %s: %s", config_path, e)
    return config_from_dict(data)
