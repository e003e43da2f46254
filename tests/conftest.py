"""Pytest fixtures for section-menu tests."""

from contextlib import contextmanager

import pytest

from section_menu import KeyEvent, KeyKind, NavigationMenu, Section, SelectableItem
from section_menu.config import LayoutConfig, NavigationConfig


class FakeTerminal:
    """Scripted TerminalDriver that records everything written to it."""

    def __init__(self, keys=None, size=(24, 80)):
        self.keys = list(keys or [])
        self.size = size
        self.setup_calls = 0
        self.restore_calls = 0
        self.active = False
        self.frames = 0
        self.writes = []  # (row, column, text, style)
        self._cursor = (1, 1)

    @contextmanager
    def setup(self):
        self.setup_calls += 1
        self.active = True
        try:
            yield self
        finally:
            self.restore()

    def restore(self):
        if self.active:
            self.active = False
            self.restore_calls += 1

    def terminal_size(self):
        return self.size

    def clear_screen(self):
        self.frames += 1
        self.writes.clear()

    def move_cursor(self, row, column):
        self._cursor = (row, column)

    def write(self, text, style=None):
        row, column = self._cursor
        self.writes.append((row, column, text, style))

    def flush_output(self):
        pass

    def read_key(self):
        if not self.keys:
            return KeyEvent.char("q")
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key

    def text_at(self, row):
        return [text for r, _, text, _ in self.writes if r == row]

    def screen_text(self):
        return "\n".join(text for _, _, text, _ in self.writes)


def keys(*names):
    """Build KeyEvents from short names: 'up', 'down', 'enter', ' ', 'a', ..."""
    named = {
        "up": KeyKind.ARROW_UP,
        "down": KeyKind.ARROW_DOWN,
        "left": KeyKind.ARROW_LEFT,
        "right": KeyKind.ARROW_RIGHT,
        "enter": KeyKind.ENTER,
        "esc": KeyKind.ESCAPE,
    }
    events = []
    for name in names:
        if name in named:
            events.append(KeyEvent(named[name]))
        elif name == " ":
            events.append(KeyEvent(KeyKind.SPACE, " "))
        else:
            events.append(KeyEvent.char(name))
    return events


@pytest.fixture
def make_section():
    """Factory for sections with numbered items."""

    def _make(name="Section", count=5, description=""):
        return Section(
            name=name,
            description=description,
            items=[
                SelectableItem(name=f"{name} item {i}", description=f"About item {i}", id=i)
                for i in range(count)
            ],
        )

    return _make


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def make_menu(make_section, fake_terminal):
    """Factory for menus over a FakeTerminal with a small page size."""

    def _make(counts=(5,), page_size=2, **config_kwargs):
        sections = [make_section(f"S{i}", count) for i, count in enumerate(counts)]
        config = NavigationConfig(layout=LayoutConfig(items_per_page=page_size), **config_kwargs)
        return NavigationMenu(sections, config=config, terminal=fake_terminal)

    return _make


@pytest.fixture
def key_events():
    """Builder for scripted KeyEvents, see keys()."""
    return keys


@pytest.fixture
def make_terminal():
    """Factory for FakeTerminals with a key script."""

    def _make(*names, size=(24, 80)):
        script = [n if isinstance(n, BaseException) else keys(n)[0] for n in names]
        return FakeTerminal(keys=script, size=size)

    return _make
