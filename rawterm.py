# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC

"""
rawterm -- raw-mode terminal I/O for tined

Puts the controlling terminal into raw mode (no echo, no line buffering, no
signal keys, no output post-processing), hands out input one byte at a time,
buffers output, and restores the original terminal configuration on the way
out.

Zero external dependencies. Uses only Python stdlib: termios, shutil, os,
sys, atexit. Unix only.

The raw-mode state is owned by a Terminal instance rather than a global.
run() is the safe entry point: whatever happens inside, the terminal is
restored before it returns.
"""

import atexit
import os
import shutil
import sys
import termios


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


class Color:
    """Terminal foreground color: named constant, 256-color index, or 24-bit RGB."""

    __slots__ = ("_kind", "_value")

    # kind: "named", "index", "rgb"
    def __init__(self, kind, value):
        self._kind = kind
        self._value = value

    @staticmethod
    def rgb(r, g, b):
        """Create a 24-bit RGB color."""
        return Color("rgb", (r, g, b))

    @staticmethod
    def index(n):
        """Create a color from xterm 256-color palette index."""
        return Color("index", n)

    def _sgr_fg(self):
        """Return the SGR parameters for this color as a foreground."""
        if self._kind == "named":
            idx = self._value
            if idx < 8:
                return str(30 + idx)
            return str(90 + idx - 8)
        if self._kind == "index":
            return f"38;5;{self._value}"
        r, g, b = self._value
        return f"38;2;{r};{g};{b}"

    def fg(self):
        """Return the escape sequence selecting this foreground color, as bytes."""
        return f"\x1b[{self._sgr_fg()}m".encode("ascii")

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._kind == other._kind and self._value == other._value

    def __hash__(self):
        return hash((self._kind, self._value))

    def __repr__(self):
        if self._kind == "named":
            return f"Color('named', {self._value})"
        if self._kind == "index":
            return f"Color.index({self._value})"
        return "Color.rgb({},{},{})".format(*self._value)


# Color names accepted in TINED_STYLE
NAMED_COLORS = {
    name: Color("named", i)
    for i, name in enumerate(
        ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
    )
}
NAMED_COLORS.update(
    ("bright" + name, Color("named", color._value + 8))
    for name, color in list(NAMED_COLORS.items())
)
NAMED_COLORS["purple"] = NAMED_COLORS["magenta"]
NAMED_COLORS["brightpurple"] = NAMED_COLORS["brightmagenta"]


# ---------------------------------------------------------------------------
# Control sequences
# ---------------------------------------------------------------------------

CURSOR_HOME = b"\x1b[H"
CLEAR_SCREEN = b"\x1b[2J"
ERASE_EOL = b"\x1b[0K"
RESET = b"\x1b[0m"
HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"


def cursor_position(row, col):
    """Return the sequence moving the cursor to 1-based (row, col)."""
    return f"\x1b[{row};{col}H".encode("ascii")


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------


class Terminal:
    """Owns the raw-mode state of the controlling terminal, plus I/O."""

    def __init__(self):
        if not os.isatty(sys.stdin.fileno()):
            raise RuntimeError("stdin is not a terminal")
        if not os.isatty(sys.stdout.fileno()):
            raise RuntimeError("stdout is not a terminal")

        self._in_fd = sys.stdin.fileno()
        self._out = []
        self._closed = False

        try:
            self._old_termios = termios.tcgetattr(self._in_fd)
        except termios.error as e:
            raise RuntimeError(f"can't get tty settings: {e}")

        self._set_raw()

        # Enter alternate screen
        self.write(b"\x1b[?1049h")
        self.flush()

    def _set_raw(self):
        """Apply raw terminal settings."""
        new = termios.tcgetattr(self._in_fd)
        # IFLAG
        new[0] &= ~(
            termios.BRKINT
            | termios.ICRNL
            | termios.INPCK
            | termios.ISTRIP
            | termios.IXON
        )
        # OFLAG: no post-processing, "\n" is a bare line feed
        new[1] &= ~termios.OPOST
        # CFLAG
        new[2] |= termios.CS8
        # LFLAG: Ctrl-C and friends arrive as plain bytes
        new[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        # Block until exactly one byte is available
        new[6][termios.VMIN] = 1
        new[6][termios.VTIME] = 0
        try:
            termios.tcsetattr(self._in_fd, termios.TCSAFLUSH, new)
        except termios.error as e:
            raise RuntimeError(f"can't set raw mode: {e}")

    def close(self):
        """Restore terminal state. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        self.write(SHOW_CURSOR)
        self.write(RESET)
        # Leave alternate screen
        self.write(b"\x1b[?1049l")
        self.flush()

        termios.tcsetattr(self._in_fd, termios.TCSAFLUSH, self._old_termios)

    def size(self):
        """
        Return the current (lines, cols) of the terminal.

        Queried on every call, since the terminal can be resized at any time.
        (0, 0) is returned if the size can't be determined.
        """
        sz = shutil.get_terminal_size(fallback=(0, 0))
        return max(sz.lines, 0), max(sz.columns, 0)

    # --- Output ---

    def write(self, data):
        """Queue bytes for output. Nothing is sent until flush()."""
        self._out.append(data)

    def flush(self):
        """Send queued output to the terminal."""
        data = b"".join(self._out)
        self._out = []
        try:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        except OSError:
            pass

    # --- Input ---

    def read_byte(self):
        """Block for the next input byte. Returns b"" at end of input."""
        return os.read(self._in_fd, 1)


# ---------------------------------------------------------------------------
# Safe entry point
# ---------------------------------------------------------------------------


def run(fn):
    """Safe wrapper: init terminal, call fn(terminal), restore on exit.

    Catches KeyboardInterrupt and always restores terminal state. Raises
    RuntimeError if the terminal can't be put into raw mode.
    """
    term = None
    try:
        term = Terminal()
        # Register atexit as safety net
        atexit.register(term.close)
        return fn(term)
    except KeyboardInterrupt:
        pass
    finally:
        if term:
            term.close()
            atexit.unregister(term.close)
