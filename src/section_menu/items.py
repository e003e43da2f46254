"""Data model for section_menu.

This module provides the two record types a menu is built from:
- SelectableItem: a toggleable leaf entry
- Section: a named, ordered group of items with its own callbacks

Out-of-range lookups return None and structural operations return a bool
telling the caller whether anything actually changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

ToggleCallback = Callable[[bool], None]
SectionCallback = Callable[[], None]
SectionToggleCallback = Callable[[int, bool], None]


@dataclass
class SelectableItem:
    """A single item that can be selected or deselected.

    Attributes:
        name: Display label.
        description: Optional long text shown in the footer.
        selected: Current selection state.
        id: Caller-assigned identifier. Not guaranteed unique; defaults to 0.
        user_data: Opaque payload owned by this item.
        on_toggle: Called with the new state whenever the state changes.
    """

    name: str
    description: str = field(default="", compare=False)
    selected: bool = field(default=False, compare=False)
    id: int = 0
    user_data: Any = field(default=None, compare=False, repr=False)
    on_toggle: ToggleCallback | None = field(default=None, compare=False, repr=False)

    def toggle(self) -> bool:
        """Flip the selection state and return the new state."""
        self.selected = not self.selected
        if self.on_toggle:
            self.on_toggle(self.selected)
        return self.selected

    def set_selected(self, selected: bool) -> bool:
        """Set the selection state.

        Returns:
            True if the state changed, False if it already had that value.
        """
        if self.selected == selected:
            return False
        self.selected = selected
        if self.on_toggle:
            self.on_toggle(self.selected)
        return True

    def display_string(self, selected_prefix: str = "* ", unselected_prefix: str = "  ") -> str:
        prefix = selected_prefix if self.selected else unselected_prefix
        return f"{prefix}{self.name}"

    def full_description(self) -> str:
        if self.description:
            return f"{self.name} - {self.description}"
        return self.name

    def has_user_data(self) -> bool:
        return self.user_data is not None


@dataclass
class Section:
    """A named group of selectable items.

    Item order is the display and pagination order. It only changes through
    the add/remove/sort methods below.

    Attributes:
        name: Section title.
        description: Optional long text shown in the footer.
        items: Ordered list of items owned by this section.
        user_data: Opaque payload owned by this section.
        on_enter: Called when the menu enters this section.
        on_exit: Called when the menu leaves this section.
        on_item_toggled: Called as (index, new_state) whenever an item's
            state changes through this section.
    """

    name: str
    description: str = field(default="", compare=False)
    items: list[SelectableItem] = field(default_factory=list, compare=False)
    user_data: Any = field(default=None, compare=False, repr=False)
    on_enter: SectionCallback | None = field(default=None, compare=False, repr=False)
    on_exit: SectionCallback | None = field(default=None, compare=False, repr=False)
    on_item_toggled: SectionToggleCallback | None = field(
        default=None, compare=False, repr=False
    )

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items

    # Adding items

    def add_item(
        self,
        item: SelectableItem | str,
        description: str = "",
        id: int = 0,
        user_data: Any = None,
    ) -> SelectableItem:
        """Append an item, building one from a name if needed."""
        if not isinstance(item, SelectableItem):
            item = SelectableItem(name=item, description=description, id=id, user_data=user_data)
        self.items.append(item)
        return item

    def add_items(self, items: Iterable[SelectableItem | str]) -> None:
        for item in items:
            self.add_item(item)

    # Lookup

    def get_item(self, index: int) -> SelectableItem | None:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def get_item_by_name(self, name: str) -> SelectableItem | None:
        return next((item for item in self.items if item.name == name), None)

    def get_item_by_id(self, item_id: int) -> SelectableItem | None:
        """Return the first item with this id (ids are not unique)."""
        return next((item for item in self.items if item.id == item_id), None)

    # Selection

    def _notify(self, index: int, selected: bool) -> None:
        if self.on_item_toggled:
            self.on_item_toggled(index, selected)

    def toggle_item(self, index: int) -> bool:
        """Toggle the item at index.

        Returns:
            True if an item was toggled, False if index is out of range.
        """
        item = self.get_item(index)
        if item is None:
            return False
        self._notify(index, item.toggle())
        return True

    def set_item_selected(self, index: int, selected: bool) -> bool:
        item = self.get_item(index)
        if item is None or not item.set_selected(selected):
            return False
        self._notify(index, selected)
        return True

    def select_all(self) -> None:
        for index in range(len(self.items)):
            self.set_item_selected(index, True)

    def clear_selections(self) -> None:
        for index in range(len(self.items)):
            self.set_item_selected(index, False)

    def invert_selections(self) -> None:
        for index in range(len(self.items)):
            self.toggle_item(index)

    def selected_count(self) -> int:
        return sum(1 for item in self.items if item.selected)

    def selected_names(self) -> list[str]:
        return [item.name for item in self.items if item.selected]

    def selected_items(self) -> list[SelectableItem]:
        return [item for item in self.items if item.selected]

    def selected_indices(self) -> list[int]:
        return [i for i, item in enumerate(self.items) if item.selected]

    # Display

    def display_string(self) -> str:
        if self.description:
            return f"{self.name} - {self.description}"
        return self.name

    def display_string_with_count(self) -> str:
        if not self.items:
            return self.display_string()
        return f"{self.display_string()} ({self.selected_count()}/{len(self.items)})"

    # Removal and ordering

    def remove_item(self, index: int) -> bool:
        if 0 <= index < len(self.items):
            del self.items[index]
            return True
        return False

    def remove_item_by_name(self, name: str) -> bool:
        for index, item in enumerate(self.items):
            if item.name == name:
                del self.items[index]
                return True
        return False

    def clear_items(self) -> None:
        self.items.clear()

    def sort_items_by_name(self) -> None:
        self.items.sort(key=lambda item: item.name)

    def sort_items_by_selection(self, selected_first: bool = True) -> None:
        """Stable sort grouping selected items before (or after) the rest."""
        self.items.sort(key=lambda item: item.selected, reverse=selected_first)

    # Lifecycle

    def has_user_data(self) -> bool:
        return self.user_data is not None

    def trigger_enter(self) -> None:
        if self.on_enter:
            self.on_enter()

    def trigger_exit(self) -> None:
        if self.on_exit:
            self.on_exit()
