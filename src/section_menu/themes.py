"""Configurable themes for section_menu.

The Theme dataclass holds the visual tokens used by the renderer
(prefixes, cursor markers, colors). Colors use Rich style syntax.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Theme:
    """Visual theme for menu rows.

    Attributes:
        name: Preset name.
        selected_prefix: Printed before a selected item.
        unselected_prefix: Printed before an unselected item.
        cursor_prefix: Printed before the highlighted row.
        idle_prefix: Printed before every other row (same width as cursor_prefix).
        use_unicode: Whether the preset relies on non-ASCII glyphs.
        use_colors: Whether rows are styled at all.
        border_style: Header underline style: simple, double, rounded or sharp.
        accent_color: Style of the highlighted row.
        dim_color: Style of footer text.
    """

    name: str = "default"
    selected_prefix: str = "[x] "
    unselected_prefix: str = "[ ] "
    cursor_prefix: str = "> "
    idle_prefix: str = "  "
    use_unicode: bool = False
    use_colors: bool = True
    border_style: str = "simple"
    accent_color: str = "cyan"
    dim_color: str = "dim"

    @property
    def underline_char(self) -> str:
        if self.border_style == "double":
            return "═" if self.use_unicode else "="
        if self.border_style in ("rounded", "sharp") and self.use_unicode:
            return "─"
        return "="


DEFAULT_THEME = Theme()

THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "minimal": replace(
        DEFAULT_THEME,
        name="minimal",
        selected_prefix="* ",
        unselected_prefix="  ",
        use_colors=False,
    ),
    "fancy": replace(
        DEFAULT_THEME,
        name="fancy",
        selected_prefix="✓ ",
        unselected_prefix="○ ",
        cursor_prefix="› ",
        use_unicode=True,
        border_style="rounded",
    ),
    "retro": replace(
        DEFAULT_THEME,
        name="retro",
        selected_prefix="[X] ",
        unselected_prefix="[ ] ",
        use_colors=False,
        border_style="double",
    ),
    "modern": replace(
        DEFAULT_THEME,
        name="modern",
        selected_prefix="● ",
        unselected_prefix="○ ",
        cursor_prefix="› ",
        use_unicode=True,
        border_style="rounded",
        accent_color="blue",
    ),
}


def get_theme(name: str | None) -> Theme:
    """Return a preset by name, falling back to the default theme."""
    if not name:
        return DEFAULT_THEME
    key = name.strip().lower().replace("_", "-")
    return THEMES.get(key, DEFAULT_THEME)
