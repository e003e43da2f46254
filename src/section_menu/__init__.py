"""Two-level section/item selection menus for the terminal.

A reusable library for building "pick options grouped by category"
screens: a list of sections, each opening a paginated list of toggleable
items.

Example:
    from section_menu import NavigationBuilder, SectionBuilder

    menu = (
        NavigationBuilder()
        .add_section(SectionBuilder("Display").add_item("Dark Mode").add_item("Large Text"))
        .add_section(SectionBuilder("Privacy").add_item("Block Telemetry"))
        .on_exit(lambda sections: print("done"))
        .build()
    )
    menu.run()
    menu.all_selections()  # {"Display": ["Dark Mode"]}
"""

__version__ = "0.1.0"

from .builder import NavigationBuilder, SectionBuilder
from .config import (
    LAYOUT_PRESETS,
    LayoutConfig,
    NavigationConfig,
    TextConfig,
    load_config,
)
from .items import Section, SelectableItem
from .keys import KeyEvent, KeyKind, decode_key
from .layout import anchor_row, center_string, layout
from .navigation import LoopState, NavigationMenu, NavigationState
from .pagination import Paginator
from .render import Geometry, Renderer, compute_geometry
from .terminal import RichTerminal, TerminalDriver
from .themes import DEFAULT_THEME, THEMES, Theme, get_theme

__all__ = [
    # Main classes
    "NavigationMenu",
    "NavigationState",
    "LoopState",
    "Section",
    "SelectableItem",
    # Builders
    "NavigationBuilder",
    "SectionBuilder",
    # Configuration
    "NavigationConfig",
    "LayoutConfig",
    "TextConfig",
    "LAYOUT_PRESETS",
    "load_config",
    # Theming
    "Theme",
    "THEMES",
    "DEFAULT_THEME",
    "get_theme",
    # Layout and paging
    "Paginator",
    "layout",
    "center_string",
    "anchor_row",
    "Geometry",
    "Renderer",
    "compute_geometry",
    # Terminal and keys
    "TerminalDriver",
    "RichTerminal",
    "KeyEvent",
    "KeyKind",
    "decode_key",
]
