"""Fluent builders for sections and menus.

Builders are immutable: every call returns a new builder and leaves the
original untouched, so a partially configured builder can be shared and
extended safely. ``build()`` hands out fresh objects every time.

Example:
    privacy = (
        SectionBuilder("Privacy")
        .description("Control data collection")
        .add_item("Block Telemetry", "Prevent usage reporting")
        .add_item("Secure DNS")
        .select_items(["Secure DNS"])
        .build()
    )
    menu = NavigationBuilder().theme_preset("modern").add_section(privacy).build()
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable

from .config import LAYOUT_PRESETS, LayoutConfig, NavigationConfig
from .items import Section, SectionCallback, SectionToggleCallback, SelectableItem
from .navigation import (
    CustomCommandCallback,
    ExitCallback,
    ItemToggledCallback,
    NavigationMenu,
    PageChangedCallback,
    SectionSelectedCallback,
    StateChangedCallback,
)
from .terminal import TerminalDriver
from .themes import Theme, get_theme


def _copy_section(section: Section) -> Section:
    return replace(section, items=[replace(item) for item in section.items])


@dataclass(frozen=True)
class SectionBuilder:
    """Immutable builder for a Section."""

    name: str
    _description: str = ""
    _items: tuple[SelectableItem, ...] = ()
    _user_data: Any = None
    _on_enter: SectionCallback | None = None
    _on_exit: SectionCallback | None = None
    _on_item_toggled: SectionToggleCallback | None = None

    def description(self, text: str) -> SectionBuilder:
        return replace(self, _description=text)

    def add_item(
        self,
        item: SelectableItem | str,
        description: str = "",
        id: int = 0,
        user_data: Any = None,
    ) -> SectionBuilder:
        if not isinstance(item, SelectableItem):
            item = SelectableItem(name=item, description=description, id=id, user_data=user_data)
        return replace(self, _items=self._items + (replace(item),))

    def add_items(self, items: Iterable[SelectableItem | str | tuple[str, str]]) -> SectionBuilder:
        """Add items given as SelectableItems, names, or (name, description) pairs."""
        builder = self
        for entry in items:
            if isinstance(entry, tuple):
                builder = builder.add_item(*entry)
            else:
                builder = builder.add_item(entry)
        return builder

    def add_generated_items(
        self, count: int, factory: Callable[[int], SelectableItem | str]
    ) -> SectionBuilder:
        return self.add_items(factory(i) for i in range(count))

    def select_items(self, names: Iterable[str]) -> SectionBuilder:
        wanted = set(names)
        items = tuple(
            replace(item, selected=True) if item.name in wanted else item for item in self._items
        )
        return replace(self, _items=items)

    def sort_items(self) -> SectionBuilder:
        return replace(self, _items=tuple(sorted(self._items, key=lambda item: item.name)))

    def user_data(self, data: Any) -> SectionBuilder:
        return replace(self, _user_data=data)

    def on_enter(self, callback: SectionCallback) -> SectionBuilder:
        return replace(self, _on_enter=callback)

    def on_exit(self, callback: SectionCallback) -> SectionBuilder:
        return replace(self, _on_exit=callback)

    def on_item_toggled(self, callback: SectionToggleCallback) -> SectionBuilder:
        return replace(self, _on_item_toggled=callback)

    def build(self) -> Section:
        return Section(
            name=self.name,
            description=self._description,
            items=[replace(item) for item in self._items],
            user_data=self._user_data,
            on_enter=self._on_enter,
            on_exit=self._on_exit,
            on_item_toggled=self._on_item_toggled,
        )


@dataclass(frozen=True)
class NavigationBuilder:
    """Immutable builder for a NavigationMenu."""

    _config: NavigationConfig = field(default_factory=NavigationConfig)
    _sections: tuple[Section, ...] = ()
    _terminal: TerminalDriver | None = None
    _on_section_selected: SectionSelectedCallback | None = None
    _on_item_toggled: ItemToggledCallback | None = None
    _on_page_changed: PageChangedCallback | None = None
    _on_state_changed: StateChangedCallback | None = None
    _on_custom_command: CustomCommandCallback | None = None
    _on_exit: ExitCallback | None = None

    # Configuration

    def config(self, config: NavigationConfig) -> NavigationBuilder:
        return replace(self, _config=config)

    def theme(self, theme: Theme) -> NavigationBuilder:
        return replace(self, _config=replace(self._config, theme=theme))

    def theme_preset(self, name: str) -> NavigationBuilder:
        return self.theme(get_theme(name))

    def layout(self, layout: LayoutConfig) -> NavigationBuilder:
        return replace(self, _config=replace(self._config, layout=layout))

    def layout_preset(self, name: str) -> NavigationBuilder:
        return self.layout(LAYOUT_PRESETS.get(name, LAYOUT_PRESETS["default"]))

    def items_per_page(self, count: int) -> NavigationBuilder:
        return self.layout(replace(self._config.layout, items_per_page=count))

    def text_titles(self, section_title: str, item_prefix: str) -> NavigationBuilder:
        text = replace(
            self._config.text,
            section_selection_title=section_title,
            item_selection_prefix=item_prefix,
        )
        return replace(self, _config=replace(self._config, text=text))

    def text_help(self, section_help: str, item_help: str) -> NavigationBuilder:
        text = replace(
            self._config.text, help_text_sections=section_help, help_text_items=item_help
        )
        return replace(self, _config=replace(self._config, text=text))

    def keys_vim_style(self, enable: bool = True) -> NavigationBuilder:
        return replace(self, _config=replace(self._config, enable_vim_keys=enable))

    def keys_quick_select(self, enable: bool = True) -> NavigationBuilder:
        return replace(self, _config=replace(self._config, enable_quick_select=enable))

    def keys_custom_shortcut(self, key: str, description: str) -> NavigationBuilder:
        shortcuts = {**self._config.custom_shortcuts, key: description}
        return replace(self, _config=replace(self._config, custom_shortcuts=shortcuts))

    def terminal(self, terminal: TerminalDriver) -> NavigationBuilder:
        return replace(self, _terminal=terminal)

    # Sections

    def add_section(self, section: Section | SectionBuilder) -> NavigationBuilder:
        if isinstance(section, SectionBuilder):
            section = section.build()
        return replace(self, _sections=self._sections + (section,))

    def add_sections(self, sections: Iterable[Section | SectionBuilder]) -> NavigationBuilder:
        builder = self
        for section in sections:
            builder = builder.add_section(section)
        return builder

    # Observers

    def on_section_selected(self, callback: SectionSelectedCallback) -> NavigationBuilder:
        return replace(self, _on_section_selected=callback)

    def on_item_toggled(self, callback: ItemToggledCallback) -> NavigationBuilder:
        return replace(self, _on_item_toggled=callback)

    def on_page_changed(self, callback: PageChangedCallback) -> NavigationBuilder:
        return replace(self, _on_page_changed=callback)

    def on_state_changed(self, callback: StateChangedCallback) -> NavigationBuilder:
        return replace(self, _on_state_changed=callback)

    def on_custom_command(self, callback: CustomCommandCallback) -> NavigationBuilder:
        return replace(self, _on_custom_command=callback)

    def on_exit(self, callback: ExitCallback) -> NavigationBuilder:
        return replace(self, _on_exit=callback)

    def build(self) -> NavigationMenu:
        """Create a menu that owns fresh copies of the configured sections."""
        menu = NavigationMenu(
            sections=[_copy_section(section) for section in self._sections],
            config=self._config,
            terminal=self._terminal,
        )
        menu.set_section_selected_callback(self._on_section_selected)
        menu.set_item_toggled_callback(self._on_item_toggled)
        menu.set_page_changed_callback(self._on_page_changed)
        menu.set_state_changed_callback(self._on_state_changed)
        menu.set_custom_command_callback(self._on_custom_command)
        menu.set_exit_callback(self._on_exit)
        return menu
