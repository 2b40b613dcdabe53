# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC

"""
viewport -- draws the visible part of a TextBuffer

The view always follows the tail of the buffer: the first visible row is
max(0, size - lines). The screen is cleared only when that offset changes;
otherwise rows are redrawn in place from the top-left corner, each one
followed by an erase-to-end-of-line.

Each row is drawn after a line-number gutter. Keywords are colored when they
start at the beginning of the row or right after whitespace. Matching is by
prefix only, so "iffy" starts with a highlighted "if".

Rows are clipped to the terminal width, and control bytes are shown as a
one-cell placeholder, so every byte takes exactly one cell on screen and
nothing in a file is run as a terminal command. A Tab is shown as a space.

Output goes through a 'write' callable taking bytes, so the renderer never
touches the terminal itself.
"""

from collections import namedtuple

from rawterm import (
    CLEAR_SCREEN,
    CURSOR_HOME,
    ERASE_EOL,
    HIDE_CURSOR,
    RESET,
    SHOW_CURSOR,
    Color,
    cursor_position,
)

# Terminal dimensions, queried by the caller before every render
Screen = namedtuple("Screen", "lines cols")

# Width of the right-aligned line number
NUMBER_WIDTH = 5

# Number column plus one separating space
GUTTER_WIDTH = NUMBER_WIDTH + 1

KEYWORDS = (b"while", b"for", b"if", b"else", b"switch", b"case")

_WHITESPACE = b" \t"

# Shown in place of a control byte (0x00-0x1F, 0x7F)
PLACEHOLDER = b"?"


def _visible(byte):
    # Returns the bytes drawn for a single row byte
    if byte == 0x09:
        return b" "
    if byte < 0x20 or byte == 0x7F:
        return PLACEHOLDER
    return bytes((byte,))


# Default colors. tined overrides these from TINED_STYLE.
DEFAULT_COLORS = {
    "gutter": Color.rgb(0x6E, 0x76, 0x81),
    "keyword": Color.rgb(0xC6, 0x78, 0xDD),
    "status": Color.rgb(0xE5, 0xC0, 0x7B),
}


def scroll_offset(size, lines):
    """
    Index of the first visible row.

    A zero-height screen (size lookup failed) never scrolls, and every row
    gets drawn.
    """
    if lines <= 0:
        return 0
    return max(0, size - lines)


def keyword_at(cells, i):
    """
    Return the keyword starting at index i of 'cells', or None.

    A keyword only starts at the beginning of the row or right after
    whitespace.
    """
    if i > 0 and cells[i - 1] not in _WHITESPACE:
        return None
    for kw in KEYWORDS:
        if cells.startswith(kw, i):
            return kw
    return None


def highlight_row(cells, keyword_color):
    """
    Return the bytes of 'cells' with keywords wrapped in color escapes and
    control bytes replaced, one output cell per input byte.
    """
    color = keyword_color.fg()
    out = bytearray()
    i = 0
    n = len(cells)
    while i < n:
        kw = keyword_at(cells, i)
        if kw:
            out += color + kw + RESET
            i += len(kw)
        else:
            out += _visible(cells[i])
            i += 1
    # Color always resets at the end of the line
    out += RESET
    return bytes(out)


def gutter(linenr, gutter_color):
    """Colored, right-aligned, 1-based line number plus separator."""
    return (
        gutter_color.fg()
        + f"{linenr:>{NUMBER_WIDTH}}".encode("ascii")
        + RESET
        + b" "
    )


def render(write, buf, screen, prev_scroll=None, colors=None):
    """
    Draw 'buf' for a screen of the given size and place the cursor.

    write:
      Callable taking bytes

    buf:
      TextBuffer to draw

    screen:
      Screen with the current terminal size

    prev_scroll:
      Offset returned by the previous call. None forces a full repaint.

    colors:
      Dict with "gutter" and "keyword" Colors. Defaults to DEFAULT_COLORS.

    Returns the new scroll offset, to be passed back in on the next call.
    """
    if colors is None:
        colors = DEFAULT_COLORS

    scroll = scroll_offset(buf.size, screen.lines)

    if scroll != prev_scroll:
        write(CLEAR_SCREEN + CURSOR_HOME)
    else:
        write(CURSOR_HOME)

    # A zero width (size lookup failed) draws rows unclipped
    width = max(screen.cols - GUTTER_WIDTH, 0) if screen.cols > 0 else None

    # The view is pinned to the bottom, so every row from 'scroll' on fits
    for i in range(scroll, buf.size):
        if i > scroll:
            write(b"\r\n")
        write(gutter(i + 1, colors["gutter"]))
        write(highlight_row(buf.rows[i].cells[:width], colors["keyword"]))
        write(ERASE_EOL)

    place_cursor(write, buf, scroll)
    return scroll


def place_cursor(write, buf, scroll):
    """
    Move the terminal cursor to the buffer cursor, past the gutter.

    A cursor on a row above the visible window is hidden. Its position is
    still shown on the status line.
    """
    row = buf.cursor_row - scroll + 1
    if row < 1:
        write(HIDE_CURSOR)
        return
    write(SHOW_CURSOR + cursor_position(row, buf.cursor_col + 1 + GUTTER_WIDTH))


def draw_status(write, screen, text, color=None):
    """
    Draw 'text' on the bottom line of the terminal, clipped to its width.

    'screen' is the full terminal size, not the text area. Nothing is drawn
    on a zero-sized terminal.
    """
    if screen.lines <= 0 or screen.cols <= 0:
        return
    if color is None:
        color = DEFAULT_COLORS["status"]
    write(
        cursor_position(screen.lines, 1)
        + color.fg()
        + text[: screen.cols]
        + RESET
        + ERASE_EOL
    )
