"""Two-level section/item navigation.

NavigationMenu owns a list of Sections and walks the user through them:
a section list first, then one paginated item list at a time. A blocking
loop alternates between painting a frame (when something changed) and
reading one key, so every mutation and callback triggered by a key is
finished before the next key is read.

Example:
    from section_menu import NavigationMenu, Section

    menu = NavigationMenu([Section("Privacy", items=[...])])
    menu.set_exit_callback(lambda sections: save(sections))
    menu.run()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable

from .config import LayoutConfig, NavigationConfig, TextConfig
from .items import Section, SelectableItem
from .keys import KeyEvent, KeyKind
from .pagination import Paginator
from .render import Renderer
from .terminal import RichTerminal, TerminalDriver
from .themes import Theme

logger = logging.getLogger(__name__)


class NavigationState(Enum):
    SECTION_SELECTION = "section_selection"
    ITEM_SELECTION = "item_selection"


SectionSelectedCallback = Callable[[int, Section], None]
ItemToggledCallback = Callable[[int, int, bool], None]
PageChangedCallback = Callable[[int, int], None]
StateChangedCallback = Callable[[NavigationState, NavigationState], None]
CustomCommandCallback = Callable[[str, NavigationState], bool]
ExitCallback = Callable[[list[Section]], None]


@dataclass
class LoopState:
    """Control loop flags."""

    running: bool = False
    needs_redraw: bool = True


class NavigationMenu:
    """Interactive section -> item selection menu.

    In the section list the selection index is the section cursor; in an
    item list it is the offset of the highlighted item within the current
    page.

    Keyboard controls:
        - q/Q: Quit (always, before anything else)
        - Up/Down (j/k with vim keys): Move
        - Enter: Open the highlighted section / back to the section list
        - 1-9: Open section n (section list) or go to page n (item list)
        - Space: Toggle item
        - Left/Right: Previous/next page
        - a / n: Select all / none in the current section
        - b, Esc (h with vim keys): Back to the section list

    Args:
        sections: Initial sections (ownership passes to the menu).
        config: Theme, layout, text and key settings.
        terminal: Terminal driver (a RichTerminal if not provided).
    """

    def __init__(
        self,
        sections: Iterable[Section] | None = None,
        config: NavigationConfig | None = None,
        terminal: TerminalDriver | None = None,
    ):
        self.sections: list[Section] = list(sections or [])
        self.config = config or NavigationConfig()
        self.terminal = terminal or RichTerminal()
        self.renderer = Renderer(self.terminal)
        self.loop = LoopState()

        self._state = NavigationState.SECTION_SELECTION
        self._section_index = 0
        self._selection_index = 0
        self._page = 0

        self._on_section_selected: SectionSelectedCallback | None = None
        self._on_item_toggled: ItemToggledCallback | None = None
        self._on_page_changed: PageChangedCallback | None = None
        self._on_state_changed: StateChangedCallback | None = None
        self._on_custom_command: CustomCommandCallback | None = None
        self._on_exit: ExitCallback | None = None

    # Read-only state

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def in_item_selection(self) -> bool:
        return self._state is NavigationState.ITEM_SELECTION

    @property
    def current_section_index(self) -> int:
        return self._section_index

    @property
    def current_selection_index(self) -> int:
        return self._selection_index

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def running(self) -> bool:
        return self.loop.running

    # Section list management

    def add_section(self, section: Section) -> None:
        self.sections.append(section)
        self._validate_indices()
        self.loop.needs_redraw = True

    def add_sections(self, sections: Iterable[Section]) -> None:
        self.sections.extend(sections)
        self._validate_indices()
        self.loop.needs_redraw = True

    def get_section(self, index: int) -> Section | None:
        if 0 <= index < len(self.sections):
            return self.sections[index]
        return None

    def get_section_by_name(self, name: str) -> Section | None:
        return next((s for s in self.sections if s.name == name), None)

    def section_count(self) -> int:
        return len(self.sections)

    def remove_section(self, index: int) -> bool:
        if not 0 <= index < len(self.sections):
            return False
        del self.sections[index]
        self._validate_indices()
        self.loop.needs_redraw = True
        return True

    def remove_section_by_name(self, name: str) -> bool:
        for index, section in enumerate(self.sections):
            if section.name == name:
                return self.remove_section(index)
        return False

    def clear_sections(self) -> None:
        self.sections.clear()
        self._section_index = 0
        self._selection_index = 0
        self._page = 0
        self._change_state(NavigationState.SECTION_SELECTION)
        self.loop.needs_redraw = True

    def current_section(self) -> Section | None:
        return self.get_section(self._section_index)

    def current_item(self) -> SelectableItem | None:
        """Return the highlighted item, or None outside an item list."""
        section = self.current_section()
        if section is None or not self.in_item_selection:
            return None
        start, end = self.page_bounds()
        index = start + self._selection_index
        if index >= end:
            return None
        return section.get_item(index)

    def highlighted_description(self) -> str:
        if self.in_item_selection:
            item = self.current_item()
            return item.description if item else ""
        section = self.get_section(self._selection_index)
        return section.description if section else ""

    # Observer callbacks

    def set_section_selected_callback(self, callback: SectionSelectedCallback | None) -> None:
        self._on_section_selected = callback

    def set_item_toggled_callback(self, callback: ItemToggledCallback | None) -> None:
        self._on_item_toggled = callback

    def set_page_changed_callback(self, callback: PageChangedCallback | None) -> None:
        self._on_page_changed = callback

    def set_state_changed_callback(self, callback: StateChangedCallback | None) -> None:
        self._on_state_changed = callback

    def set_custom_command_callback(self, callback: CustomCommandCallback | None) -> None:
        self._on_custom_command = callback

    def set_exit_callback(self, callback: ExitCallback | None) -> None:
        self._on_exit = callback

    # Configuration

    def update_config(self, config: NavigationConfig) -> None:
        self.config = config
        self._validate_indices()
        self.loop.needs_redraw = True

    def update_theme(self, theme: Theme) -> None:
        self.update_config(replace(self.config, theme=theme))

    def update_layout(self, layout: LayoutConfig) -> None:
        self.update_config(replace(self.config, layout=layout))

    def update_text_config(self, text: TextConfig) -> None:
        self.update_config(replace(self.config, text=text))

    # Pagination

    @property
    def paginator(self) -> Paginator:
        return Paginator(self.config.layout.items_per_page)

    def total_pages(self) -> int:
        """Page count of the current section (1 in the section list)."""
        section = self.current_section()
        if not self.in_item_selection or section is None:
            return 1
        return self.paginator.total_pages(len(section))

    def page_bounds(self) -> tuple[int, int]:
        """Return [start, end) of the current page, or (0, 0) if no item list is open."""
        section = self.current_section()
        if not self.in_item_selection or section is None:
            return 0, 0
        return self.paginator.bounds(self._page, len(section))

    def page_info(self) -> str:
        return f"Page {self._page + 1} of {self.total_pages()}"

    def go_to_page(self, page: int) -> bool:
        """Jump to page; returns False if it is out of range or already current."""
        total_pages = self.total_pages()
        if not 0 <= page < total_pages or page == self._page:
            return False
        self._page = page
        self._selection_index = 0
        logger.debug("Page changed to %d of %d", page + 1, total_pages)
        if self._on_page_changed:
            self._on_page_changed(page, total_pages)
        self.loop.needs_redraw = True
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self._page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self._page - 1)

    # State transitions

    def _change_state(self, new_state: NavigationState) -> None:
        if self._state is new_state:
            return
        old_state = self._state
        self._state = new_state
        logger.debug("State changed: %s -> %s", old_state.value, new_state.value)
        if self._on_state_changed:
            self._on_state_changed(old_state, new_state)

    def enter_section(self, index: int) -> bool:
        section = self.get_section(index)
        if section is None:
            return False
        self._section_index = index
        self._selection_index = 0
        self._page = 0
        self._change_state(NavigationState.ITEM_SELECTION)
        section.trigger_enter()
        if self._on_section_selected:
            self._on_section_selected(index, section)
        self.loop.needs_redraw = True
        return True

    def return_to_sections(self) -> bool:
        if not self.in_item_selection:
            return False
        self._change_state(NavigationState.SECTION_SELECTION)
        self._selection_index = self._section_index
        self._page = 0
        section = self.current_section()
        if section is not None:
            section.trigger_exit()
        self.loop.needs_redraw = True
        return True

    # Cursor movement

    def move_up(self) -> None:
        if not self.in_item_selection:
            if self._selection_index > 0:
                self._selection_index -= 1
        elif self._selection_index > 0:
            self._selection_index -= 1
        elif self._page > 0 and self.go_to_page(self._page - 1):
            start, end = self.page_bounds()
            self._selection_index = max(0, end - start - 1)
        self.loop.needs_redraw = True

    def move_down(self) -> None:
        if not self.in_item_selection:
            if self._selection_index < len(self.sections) - 1:
                self._selection_index += 1
        else:
            start, end = self.page_bounds()
            if self._selection_index < end - start - 1:
                self._selection_index += 1
            elif self._page < self.total_pages() - 1:
                self.go_to_page(self._page + 1)
        self.loop.needs_redraw = True

    # Selection

    def toggle_current_item(self) -> bool:
        """Toggle the highlighted item; returns True if its state changed."""
        section = self.current_section()
        if not self.in_item_selection or section is None:
            return False
        start, end = self.page_bounds()
        global_index = start + self._selection_index
        if global_index >= end or not section.toggle_item(global_index):
            return False
        if self._on_item_toggled:
            self._on_item_toggled(
                self._section_index, global_index, section.items[global_index].selected
            )
        self.loop.needs_redraw = True
        return True

    def select_current_item(self) -> None:
        """Open the section under the cursor, or toggle the highlighted item."""
        if self.in_item_selection:
            self.toggle_current_item()
        else:
            self.enter_section(self._selection_index)

    def select_all_in_section(self) -> None:
        section = self.current_section()
        if section is not None:
            section.select_all()
            self.loop.needs_redraw = True

    def clear_section_selections(self, index: int) -> None:
        section = self.get_section(index)
        if section is not None:
            section.clear_selections()
            self.loop.needs_redraw = True

    def clear_all_selections(self) -> None:
        for section in self.sections:
            section.clear_selections()
        self.loop.needs_redraw = True

    def all_selections(self) -> dict[str, list[str]]:
        """Map section names to selected item names, skipping empty selections."""
        selections: dict[str, list[str]] = {}
        for section in self.sections:
            names = section.selected_names()
            if names:
                selections[section.name] = names
        return selections

    def section_selections(self, index: int) -> list[str]:
        section = self.get_section(index)
        return section.selected_names() if section else []

    # Input

    def handle_input(self, event: KeyEvent) -> None:
        """Apply one decoded key event."""
        character = event.character
        if event.kind is KeyKind.NORMAL and character in ("q", "Q"):
            self.exit()
            return

        if self._on_custom_command and self._on_custom_command(character, self._state):
            self.loop.needs_redraw = True
            return

        kind = event.kind
        if kind is KeyKind.ESCAPE:
            self.return_to_sections()
        elif kind is KeyKind.ARROW_UP:
            self.move_up()
        elif kind is KeyKind.ARROW_DOWN:
            self.move_down()
        elif kind is KeyKind.ARROW_LEFT:
            self.previous_page()
        elif kind is KeyKind.ARROW_RIGHT:
            self.next_page()
        elif kind is KeyKind.SPACE:
            self.toggle_current_item()
        elif kind is KeyKind.ENTER:
            if self.in_item_selection:
                self.return_to_sections()
            else:
                self.select_current_item()
        elif kind is KeyKind.NORMAL:
            self._handle_character(character)

    def _handle_character(self, character: str) -> None:
        if self.config.enable_quick_select and character.isdigit():
            self._handle_number_input(int(character))
            return

        if self.config.enable_vim_keys:
            if character == "j":
                self.move_down()
                return
            if character == "k":
                self.move_up()
                return
            if character == "h":
                self.return_to_sections()
                return

        if not self.in_item_selection:
            return
        if character == "b":
            self.return_to_sections()
        elif character == "a":
            self.select_all_in_section()
        elif character == "n":
            self.clear_section_selections(self._section_index)

    def _handle_number_input(self, number: int) -> None:
        if number < 1:
            return
        if self.in_item_selection:
            self.go_to_page(number - 1)
        else:
            self.enter_section(number - 1)

    # Index bookkeeping

    def _validate_indices(self) -> None:
        """Pull section, page and selection indices back into range."""
        if self._section_index >= len(self.sections):
            self._section_index = max(0, len(self.sections) - 1)
        self._page = min(self._page, self.total_pages() - 1)
        self._clamp_selection()

    def _clamp_selection(self) -> None:
        if self.in_item_selection:
            start, end = self.page_bounds()
            limit = end - start
        else:
            limit = len(self.sections)
        if self._selection_index >= limit:
            self._selection_index = max(0, limit - 1)

    # Control loop

    def exit(self) -> None:
        """Ask the loop to stop after the current event."""
        self.loop.running = False

    def render(self) -> None:
        self.renderer.render(self)

    def process_events(self) -> None:
        """Block for one key and apply it."""
        event = self.terminal.read_key()
        if event is not None:
            self.handle_input(event)

    def run(self) -> None:
        """Run the interactive loop until quit or exit().

        Refuses to start with no sections. The terminal is released on every
        exit path, then the exit callback receives the final sections once.
        """
        if not self.sections:
            logger.warning("No sections available. Add sections before running.")
            return

        with self.terminal.setup():
            self._validate_indices()
            self.loop.running = True
            self.loop.needs_redraw = True

            while self.loop.running:
                if self.loop.needs_redraw:
                    self.render()
                    self.loop.needs_redraw = False
                try:
                    self.process_events()
                except KeyboardInterrupt:
                    self.exit()

        if self._on_exit:
            self._on_exit(self.sections)
