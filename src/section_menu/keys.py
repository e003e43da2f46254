"""Keyboard input helpers for section_menu.

Raw keys come from ``readchar.readkey()`` as strings (single characters or
escape sequences). They are decoded once into a :class:`KeyEvent` so the
navigation layer never has to look at escape sequences.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import readchar


class KeyKind(Enum):
    """Kinds of decoded key events."""

    NORMAL = "normal"
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    ARROW_LEFT = "left"
    ARROW_RIGHT = "right"
    ENTER = "enter"
    SPACE = "space"
    ESCAPE = "escape"


@dataclass(frozen=True)
class KeyEvent:
    """A single decoded key press.

    Attributes:
        kind: What kind of key was pressed.
        character: The typed character for NORMAL keys, otherwise the raw
            single character if there is one (``" "`` for SPACE), else "".
    """

    kind: KeyKind
    character: str = ""

    @classmethod
    def char(cls, character: str) -> KeyEvent:
        """Shortcut for a NORMAL key event."""
        return cls(KeyKind.NORMAL, character)


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_exit(key: str) -> bool:
    """Check if key is the quit key (q or Q)."""
    return key.lower() == "q"


def is_up(key: str) -> bool:
    """Check if key is the up arrow."""
    return key == readchar.key.UP


def is_down(key: str) -> bool:
    """Check if key is the down arrow."""
    return key == readchar.key.DOWN


def is_left(key: str) -> bool:
    """Check if key is the left arrow."""
    return key == readchar.key.LEFT


def is_right(key: str) -> bool:
    """Check if key is the right arrow."""
    return key == readchar.key.RIGHT


def is_space(key: str) -> bool:
    """Check if key is space."""
    return key == " "


def decode_key(key: str) -> KeyEvent:
    """Translate a raw readchar key into a KeyEvent."""
    if is_up(key):
        return KeyEvent(KeyKind.ARROW_UP)
    if is_down(key):
        return KeyEvent(KeyKind.ARROW_DOWN)
    if is_left(key):
        return KeyEvent(KeyKind.ARROW_LEFT)
    if is_right(key):
        return KeyEvent(KeyKind.ARROW_RIGHT)
    if is_enter(key):
        return KeyEvent(KeyKind.ENTER, "\n")
    if is_space(key):
        return KeyEvent(KeyKind.SPACE, " ")
    if is_escape(key):
        return KeyEvent(KeyKind.ESCAPE)
    if len(key) == 1:
        return KeyEvent.char(key)
    # Unknown escape sequence (function keys, page up, ...)
    return KeyEvent.char("")
