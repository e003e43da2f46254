"""Frame rendering for NavigationMenu.

Each frame is painted with direct cursor-addressed writes through the
TerminalDriver: clear, header, body (section list or one page of items),
then a bottom-anchored footer. There is no back buffer, so an interrupted
frame stays half-painted until the next redraw.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .config import LayoutConfig
from .layout import anchor_row, center_string, layout

if TYPE_CHECKING:
    from .navigation import NavigationMenu
    from .terminal import TerminalDriver

logger = logging.getLogger(__name__)

SIDE_MARGIN = 4
FIXED_LEFT_MARGIN = 2
HEADER_ROWS = 3
FOOTER_PADDING = 2
DESCRIPTION_GAP = 2


@dataclass(frozen=True)
class Geometry:
    """Where a frame goes on screen (1-based rows)."""

    rows: int
    columns: int
    content_width: int
    left_padding: int
    start_row: int

    @property
    def column(self) -> int:
        return self.left_padding + 1

    @property
    def body_row(self) -> int:
        return self.start_row + HEADER_ROWS


def content_width_for(columns: int, layout_cfg: LayoutConfig) -> int:
    """Return the column budget for content on a terminal this wide."""
    if not layout_cfg.auto_resize_content:
        return layout_cfg.max_content_width
    return max(
        layout_cfg.min_content_width,
        min(layout_cfg.max_content_width, columns - SIDE_MARGIN),
    )


def compute_geometry(rows: int, columns: int, body_rows: int, layout_cfg: LayoutConfig) -> Geometry:
    content_width = content_width_for(columns, layout_cfg)

    if layout_cfg.center_horizontally:
        left_padding = max(0, (columns - content_width) // 2)
    else:
        left_padding = FIXED_LEFT_MARGIN

    if layout_cfg.center_vertically:
        content_height = HEADER_ROWS + body_rows + FOOTER_PADDING
        start_row = max(1, (rows - content_height) // 2)
    else:
        start_row = 1 + layout_cfg.vertical_padding

    return Geometry(
        rows=rows,
        columns=columns,
        content_width=content_width,
        left_padding=left_padding,
        start_row=start_row,
    )


class Renderer:
    """Paints NavigationMenu frames onto a TerminalDriver."""

    def __init__(self, terminal: TerminalDriver):
        self.terminal = terminal

    def render(self, menu: NavigationMenu) -> Geometry:
        """Paint one full frame and return the geometry used."""
        self.terminal.clear_screen()
        rows, columns = self.terminal.terminal_size()
        geometry = compute_geometry(rows, columns, self._body_rows(menu), menu.config.layout)
        logger.debug("Rendering %dx%d frame: %s", columns, rows, geometry)

        if menu.in_item_selection:
            self._render_item_selection(menu, geometry)
        else:
            self._render_section_selection(menu, geometry)

        self._render_footer(menu, geometry)
        self.terminal.flush_output()
        return geometry

    def _body_rows(self, menu: NavigationMenu) -> int:
        if not menu.in_item_selection:
            return menu.section_count()
        start, end = menu.page_bounds()
        return max(1, end - start)

    def _align(self, menu: NavigationMenu, text: str, width: int) -> str:
        if menu.config.layout.center_horizontally:
            return center_string(text, width)
        return text

    def _put(
        self,
        menu: NavigationMenu,
        geometry: Geometry,
        row: int,
        text: str,
        style: str | None = None,
    ) -> None:
        self.terminal.move_cursor(row, geometry.column)
        self.terminal.write(self._align(menu, text, geometry.content_width), style)

    def _row_style(self, menu: NavigationMenu, highlighted: bool) -> str | None:
        theme = menu.config.theme
        if highlighted and theme.use_colors:
            return f"bold {theme.accent_color}"
        return None

    def _render_header(self, menu: NavigationMenu, geometry: Geometry, title: str) -> None:
        self._put(menu, geometry, geometry.start_row, title)
        if menu.config.layout.show_borders:
            underline = menu.config.theme.underline_char * len(title)
            self._put(menu, geometry, geometry.start_row + 1, underline)

    def _render_section_selection(self, menu: NavigationMenu, geometry: Geometry) -> None:
        text_cfg = menu.config.text
        theme = menu.config.theme
        self._render_header(menu, geometry, text_cfg.section_selection_title)

        for i, section in enumerate(menu.sections):
            label = f"{i + 1}. {section.name}"
            if text_cfg.show_counters and len(section) > 0:
                label += f" ({section.selected_count()}/{len(section)})"
            highlighted = i == menu.current_selection_index
            prefix = theme.cursor_prefix if highlighted else theme.idle_prefix
            self._put(
                menu, geometry, geometry.body_row + i, prefix + label,
                self._row_style(menu, highlighted),
            )

    def _render_item_selection(self, menu: NavigationMenu, geometry: Geometry) -> None:
        section = menu.current_section()
        if section is None:
            return

        text_cfg = menu.config.text
        theme = menu.config.theme
        self._render_header(menu, geometry, text_cfg.item_selection_prefix + section.name)

        if section.is_empty():
            self._put(menu, geometry, geometry.body_row, text_cfg.empty_section_message)
            return

        start, end = menu.page_bounds()
        for offset, item in enumerate(section.items[start:end]):
            highlighted = offset == menu.current_selection_index
            prefix = theme.cursor_prefix if highlighted else theme.idle_prefix
            line = prefix + item.display_string(theme.selected_prefix, theme.unselected_prefix)
            self._put(
                menu, geometry, geometry.body_row + offset, line,
                self._row_style(menu, highlighted),
            )

    def help_text(self, menu: NavigationMenu) -> str:
        text_cfg = menu.config.text
        if menu.in_item_selection:
            parts = [text_cfg.help_text_items]
            if text_cfg.show_page_numbers:
                parts.append(menu.page_info())
        else:
            parts = [text_cfg.help_text_sections]
        shortcuts = menu.config.custom_shortcuts
        if shortcuts:
            parts.append(" • ".join(f"{key} {desc}" for key, desc in shortcuts.items()))
        return " | ".join(part for part in parts if part)

    def _put_block(
        self,
        menu: NavigationMenu,
        geometry: Geometry,
        bottom_row: int,
        text: str,
        style: str | None,
    ) -> int:
        """Write a wrapped block ending on bottom_row; return its top row."""
        wrapped, _ = layout(
            text, geometry.content_width, center=menu.config.layout.center_horizontally
        )
        # Uncentered text is not wrapped but may still hold explicit newlines.
        lines = wrapped.split("\n")
        top = anchor_row(bottom_row, len(lines))
        for i, line in enumerate(lines):
            if top + i < 1:
                continue
            self.terminal.move_cursor(top + i, geometry.column)
            self.terminal.write(line, style)
        return top

    def _render_footer(self, menu: NavigationMenu, geometry: Geometry) -> None:
        dim = menu.config.theme.dim_color if menu.config.theme.use_colors else None
        top = geometry.rows
        if menu.config.text.show_help_text:
            top = self._put_block(menu, geometry, geometry.rows - 1, self.help_text(menu), dim)

        description = menu.highlighted_description()
        if description:
            self._put_block(menu, geometry, top - DESCRIPTION_GAP, description, None)
