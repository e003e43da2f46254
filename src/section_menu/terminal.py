"""Terminal driver used by the navigation loop.

NavigationMenu only talks to the TerminalDriver protocol, so tests can
swap in a scripted fake. RichTerminal is the real implementation: Rich
owns the screen (alternate buffer, cursor, styled output) and readchar
delivers one raw key per call.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol

import readchar
from rich.console import Console
from rich.control import Control

from .keys import KeyEvent, decode_key


class TerminalDriver(Protocol):
    """Capabilities the navigation loop needs from a terminal.

    Rows and columns are 1-based, like ANSI cursor addressing.
    """

    def setup(self) -> Iterator[TerminalDriver]: ...

    def restore(self) -> None: ...

    def terminal_size(self) -> tuple[int, int]: ...

    def clear_screen(self) -> None: ...

    def move_cursor(self, row: int, column: int) -> None: ...

    def write(self, text: str, style: str | None = None) -> None: ...

    def flush_output(self) -> None: ...

    def read_key(self) -> KeyEvent | None: ...


class RichTerminal:
    """TerminalDriver backed by a Rich Console and readchar.

    Args:
        console: Rich Console for output (auto-created if not provided).
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False)
        self._active = False

    @contextmanager
    def setup(self) -> Iterator[RichTerminal]:
        """Take over the screen for the duration of the block.

        The screen is always handed back, including when the block raises.
        """
        self.console.set_alt_screen(True)
        self.console.show_cursor(False)
        self._active = True
        try:
            yield self
        finally:
            self.restore()

    def restore(self) -> None:
        if not self._active:
            return
        self._active = False
        self.console.show_cursor(True)
        self.console.set_alt_screen(False)

    def terminal_size(self) -> tuple[int, int]:
        width, height = self.console.size
        return height, width

    def clear_screen(self) -> None:
        self.console.clear()

    def move_cursor(self, row: int, column: int) -> None:
        self.console.control(Control.move_to(max(0, column - 1), max(0, row - 1)))

    def write(self, text: str, style: str | None = None) -> None:
        self.console.print(
            text, style=style, end="", markup=False, highlight=False, soft_wrap=True
        )

    def flush_output(self) -> None:
        self.console.file.flush()

    def read_key(self) -> KeyEvent | None:
        """Block until one key is pressed and decode it."""
        key = readchar.readkey()
        if not key:
            return None
        return decode_key(key)
