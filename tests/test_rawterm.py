# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC
#
# rawterm tests: colors and control sequences, plus raw-mode setup and
# teardown against a faked termios, so no real terminal is needed.

import copy
import io
import os
import shutil
import sys
import termios
from types import SimpleNamespace

import pytest

import rawterm
from rawterm import NAMED_COLORS, RESET, SHOW_CURSOR, Color, cursor_position

# ---------------------------------------------------------------------------
# Fake terminal plumbing
# ---------------------------------------------------------------------------


class FakeStream:
    def __init__(self, fd):
        self._fd = fd
        self.buffer = io.BytesIO()

    def fileno(self):
        return self._fd


def _cooked_attrs():
    cc = [0] * termios.NCCS
    cc[termios.VMIN] = 5
    cc[termios.VTIME] = 8
    iflag = termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP
    iflag |= termios.IXON | termios.IGNPAR
    lflag = termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG
    lflag |= termios.ECHOE
    return [
        iflag,
        termios.OPOST | termios.ONLCR,
        termios.CREAD,
        lflag,
        termios.B38400,
        termios.B38400,
        cc,
    ]


@pytest.fixture
def fake_tty(monkeypatch):
    """Pretend stdin/stdout are a terminal. Input comes from a pipe."""
    r, w = os.pipe()
    tty = SimpleNamespace(
        attrs=_cooked_attrs(),
        set_calls=[],
        stdin=FakeStream(r),
        stdout=FakeStream(w),
        write_fd=w,
        fail_set=False,
    )

    def tcgetattr(fd):
        return copy.deepcopy(tty.attrs)

    def tcsetattr(fd, when, attrs):
        if tty.fail_set:
            raise termios.error(5, "Input/output error")
        tty.set_calls.append(copy.deepcopy(attrs))

    monkeypatch.setattr(sys, "stdin", tty.stdin)
    monkeypatch.setattr(sys, "stdout", tty.stdout)
    # pytest's capture puts its own sys.stdout back for the call phase, so
    # patch rawterm's view of stdio as well
    monkeypatch.setattr(
        rawterm, "sys", SimpleNamespace(stdin=tty.stdin, stdout=tty.stdout)
    )
    monkeypatch.setattr(os, "isatty", lambda fd: True)
    monkeypatch.setattr(termios, "tcgetattr", tcgetattr)
    monkeypatch.setattr(termios, "tcsetattr", tcsetattr)

    yield tty

    os.close(r)
    try:
        os.close(w)
    except OSError:
        pass


# -- colors --------------------------------------------------------------------


def test_rgb_foreground():
    assert Color.rgb(255, 0, 10).fg() == b"\x1b[38;2;255;0;10m"


def test_index_and_named_foreground():
    assert Color.index(196).fg() == b"\x1b[38;5;196m"
    assert NAMED_COLORS["red"].fg() == b"\x1b[31m"
    assert NAMED_COLORS["brightred"].fg() == b"\x1b[91m"
    assert NAMED_COLORS["purple"] == NAMED_COLORS["magenta"]


def test_named_colors_complete():
    assert len(NAMED_COLORS) == 18
    assert NAMED_COLORS["brightwhite"] == Color("named", 15)


def test_color_equality():
    assert Color.rgb(1, 2, 3) == Color.rgb(1, 2, 3)
    assert Color.rgb(1, 2, 3) != Color.index(1)
    assert hash(Color.index(7)) == hash(Color.index(7))
    assert repr(Color.rgb(1, 2, 3)) == "Color.rgb(1,2,3)"


def test_control_sequences():
    assert cursor_position(3, 12) == b"\x1b[3;12H"
    assert rawterm.CURSOR_HOME == b"\x1b[H"
    assert rawterm.CLEAR_SCREEN == b"\x1b[2J"
    assert rawterm.ERASE_EOL == b"\x1b[0K"
    assert RESET == b"\x1b[0m"
    assert rawterm.HIDE_CURSOR == b"\x1b[?25l"
    assert SHOW_CURSOR == b"\x1b[?25h"


# -- raw mode ------------------------------------------------------------------


def test_raw_mode_flags(fake_tty):
    term = rawterm.Terminal()
    raw = fake_tty.set_calls[-1]

    assert not raw[0] & (
        termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
    )
    assert raw[0] & termios.IGNPAR
    assert not raw[1] & termios.OPOST
    assert raw[2] & termios.CS8
    assert not raw[3] & (termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    assert raw[3] & termios.ECHOE
    assert raw[6][termios.VMIN] == 1
    assert raw[6][termios.VTIME] == 0

    # Alternate screen
    assert fake_tty.stdout.buffer.getvalue() == b"\x1b[?1049h"

    term.close()


def test_close_restores_and_is_idempotent(fake_tty):
    term = rawterm.Terminal()
    term.close()

    assert fake_tty.set_calls[-1] == _cooked_attrs()
    assert fake_tty.stdout.buffer.getvalue().endswith(
        SHOW_CURSOR + RESET + b"\x1b[?1049l"
    )

    n = len(fake_tty.set_calls)
    term.close()
    assert len(fake_tty.set_calls) == n


def test_not_a_tty(fake_tty, monkeypatch):
    monkeypatch.setattr(os, "isatty", lambda fd: False)
    with pytest.raises(RuntimeError, match="stdin is not a terminal"):
        rawterm.Terminal()


def test_raw_mode_failure(fake_tty):
    fake_tty.fail_set = True
    with pytest.raises(RuntimeError, match="can't set raw mode"):
        rawterm.Terminal()


# -- I/O -----------------------------------------------------------------------


def test_read_byte(fake_tty):
    term = rawterm.Terminal()
    os.write(fake_tty.write_fd, b"ab")
    assert term.read_byte() == b"a"
    assert term.read_byte() == b"b"

    os.close(fake_tty.write_fd)
    assert term.read_byte() == b""
    term.close()


def test_output_is_buffered(fake_tty):
    term = rawterm.Terminal()
    start = len(fake_tty.stdout.buffer.getvalue())

    term.write(b"hello")
    assert len(fake_tty.stdout.buffer.getvalue()) == start

    term.flush()
    assert fake_tty.stdout.buffer.getvalue()[start:] == b"hello"
    term.close()


def test_size_is_lines_then_cols(fake_tty, monkeypatch):
    term = rawterm.Terminal()
    monkeypatch.setattr(
        shutil, "get_terminal_size", lambda fallback: os.terminal_size((80, 24))
    )
    assert term.size() == (24, 80)

    # Lookup failure degrades to a zero-sized screen
    monkeypatch.setattr(
        shutil, "get_terminal_size", lambda fallback: os.terminal_size(fallback)
    )
    assert term.size() == (0, 0)
    term.close()


# -- run() ---------------------------------------------------------------------


def test_run_returns_result(fake_tty):
    assert rawterm.run(lambda term: "done") == "done"
    assert fake_tty.set_calls[-1] == _cooked_attrs()


def test_run_restores_on_exception(fake_tty):
    def fn(term):
        raise ValueError("boom")

    with pytest.raises(ValueError):
        rawterm.run(fn)
    assert fake_tty.set_calls[-1] == _cooked_attrs()


def test_run_swallows_keyboard_interrupt(fake_tty):
    def fn(term):
        raise KeyboardInterrupt

    assert rawterm.run(fn) is None
    assert fake_tty.set_calls[-1] == _cooked_attrs()


def test_run_without_tty(fake_tty, monkeypatch):
    monkeypatch.setattr(os, "isatty", lambda fd: False)
    with pytest.raises(RuntimeError):
        rawterm.run(lambda term: None)
