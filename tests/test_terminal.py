"""Tests for the Rich-backed terminal driver."""

from io import StringIO

import pytest
import readchar
from rich.console import Console

from section_menu import KeyKind, RichTerminal


@pytest.fixture
def terminal():
    console = Console(file=StringIO(), force_terminal=True, width=60, height=20, color_system=None)
    return RichTerminal(console=console)


def _output(terminal):
    return terminal.console.file.getvalue()


def test_size_is_rows_then_columns(terminal):
    assert terminal.terminal_size() == (20, 60)


def test_setup_switches_screens_and_always_restores(terminal):
    with pytest.raises(RuntimeError):
        with terminal.setup():
            terminal.write("hello")
            raise RuntimeError("boom")

    out = _output(terminal)
    assert "hello" in out
    assert "\x1b[?1049h" in out  # alternate screen on
    assert "\x1b[?1049l" in out  # and off again
    assert out.index("\x1b[?1049h") < out.index("hello") < out.index("\x1b[?1049l")


def test_restore_is_idempotent(terminal):
    with terminal.setup():
        pass
    before = _output(terminal)
    terminal.restore()
    assert _output(terminal) == before


def test_move_cursor_is_one_based(terminal):
    terminal.move_cursor(3, 5)
    assert "\x1b[3;5H" in _output(terminal)


def test_write_does_not_interpret_markup(terminal):
    terminal.write("[bold]literal[/bold]")
    assert "[bold]literal[/bold]" in _output(terminal)


def test_read_key_decodes_readchar_input(terminal, monkeypatch):
    monkeypatch.setattr(readchar, "readkey", lambda: readchar.key.DOWN)
    assert terminal.read_key().kind is KeyKind.ARROW_DOWN
    monkeypatch.setattr(readchar, "readkey", lambda: "")
    assert terminal.read_key() is None
