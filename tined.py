#!/usr/bin/env python3

# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC

"""
Overview
========

tined is a minimal full-screen terminal text editor. It edits one file as
raw bytes, shows it with line numbers and simple keyword coloring, and keeps
the view pinned to the end of the file.

Keys:

  Arrows    : Move the cursor (column moves stay within the row)
  Enter     : Split the row, repeating the row's indent on the new row
  Tab       : Insert one indent level
  Backspace : Delete backward. Right after the indent, removes a whole
              level. Does nothing at the start of a row.
  Ctrl-S    : Save
  Ctrl-F    : Save as (prompts on the status line)
  Ctrl-X    : Quit, without asking about unsaved changes


Running
=======

  $ tined [FILE]

If FILE exists it is loaded, otherwise the editor starts empty and FILE is
created on the first save. Without FILE, the first save asks for a name.

The exit status is 0 after a normal quit and 1 on fatal errors (FILE can't be
read, or the terminal can't be put into raw mode).


Colors
======

Colors can be changed with the TINED_STYLE environment variable, a
whitespace-separated list of <element>=<color> assignments. The elements are

    - gutter     Line numbers
    - keyword    Highlighted keywords
    - status     Status line

and a color is either #RRGGBB, one of the 16 basic color names (e.g. red,
brightblue), or a palette number 0..255. For example:

  TINED_STYLE="keyword=#ff8800 gutter=brightblack"

Invalid assignments are ignored, with a warning printed on stderr.
"""

import argparse
import errno
import os
import re
import sys

import fileio
import rawterm
from keydecode import MOVES, InputDecoder, Key
from rawterm import NAMED_COLORS, SHOW_CURSOR, Color, cursor_position
from textbuf import TAB_SIZE, TextBuffer
from viewport import DEFAULT_COLORS, Screen, draw_status, place_cursor, render

__version__ = "0.3.0"

#
# Configuration variables
#

# Environment variable with color assignments
_STYLE_ENV = "TINED_STYLE"

# Label shown in front of the save-as prompt
_SAVE_AS_LABEL = "Save as: "

_NEWLINES = (b"\r", b"\n")


def _warn(*args):
    # Prints a warning to stderr. Only used before the terminal enters raw
    # mode, where the output would get lost.
    print("tined warning: ", end="", file=sys.stderr)
    print(*args, file=sys.stderr)


def _parse_color(color_def):
    """Parse a color definition string, returning a rawterm.Color or None."""
    # HTML format, #RRGGBB
    if re.match("^#[A-Fa-f0-9]{6}$", color_def):
        return Color.rgb(
            int(color_def[1:3], 16),
            int(color_def[3:5], 16),
            int(color_def[5:7], 16),
        )

    if color_def in NAMED_COLORS:
        return NAMED_COLORS[color_def]

    try:
        num = int(color_def, 0)
    except ValueError:
        _warn("Ignoring color", color_def, "that's neither predefined nor a number")
        return None

    if 0 <= num <= 255:
        return Color.index(num)
    _warn(f"Ignoring color {color_def} outside range 0..255")
    return None


def parse_style(style_str):
    """
    Return a color dict for the viewport, starting from DEFAULT_COLORS and
    applying the '<element>=<color>' assignments in 'style_str'.
    """
    colors = dict(DEFAULT_COLORS)

    for sline in style_str.split():
        if "=" not in sline:
            _warn("Ignoring malformed style assignment", sline)
            continue

        key, data = sline.split("=", 1)
        if key not in colors:
            _warn("Ignoring non-existent style", key)
            continue

        color = _parse_color(data)
        if color is not None:
            colors[key] = color

    return colors


class Editor:
    """
    The command loop: draws the buffer, reads one event, applies it.

    buf:
      TextBuffer being edited

    filename:
      Path to save to, or None if there's no name yet

    colors:
      Dict with "gutter", "keyword" and "status" Colors
    """

    def __init__(self, buf, filename=None, colors=None):
        self.buf = buf
        self.filename = filename
        self.colors = colors if colors is not None else dict(DEFAULT_COLORS)

        # Message shown on the status line until the next edit
        self.status_msg = None

        self._term = None
        self._decoder = InputDecoder()
        # Scroll offset from the previous render. None forces a full repaint.
        self._scroll = None
        # Terminal (lines, cols) at the previous render
        self._size = None

    def run(self, term):
        """Edit until Ctrl-X or end of input. Suitable for rawterm.run()."""
        self._term = term

        while True:
            self._draw()

            c = self._decoder.next(term.read_byte)

            if c is None or c == Key.QUIT:
                return

            if c == Key.SAVE:
                if self.filename:
                    self._save(self.filename)
                else:
                    self._save_as()

            elif c == Key.SAVE_AS:
                self._save_as()

            elif c == Key.BACKSPACE:
                self.status_msg = None
                self.buf.delete_backward()

            elif c in MOVES:
                self.status_msg = None
                self.buf.move_cursor(MOVES[c])

            elif isinstance(c, bytes):
                self.status_msg = None
                self.buf.insert_char(c)

    def _draw(self):
        lines, cols = self._term.size()
        write = self._term.write

        # A resize leaves stale rows and an old status line behind
        if (lines, cols) != self._size:
            self._size = (lines, cols)
            self._scroll = None

        # The bottom line of the terminal is the status line
        self._scroll = render(
            write, self.buf, Screen(max(lines - 1, 0), cols), self._scroll, self.colors
        )
        draw_status(
            write,
            Screen(lines, cols),
            os.fsencode(self._status_text()),
            self.colors["status"],
        )
        place_cursor(write, self.buf, self._scroll)

        self._term.flush()

    def _status_text(self):
        if self.status_msg:
            return self.status_msg

        return "{} - {} line{}  {}:{}".format(
            self.filename or "[No Name]",
            self.buf.size,
            "" if self.buf.size == 1 else "s",
            self.buf.cursor_row + 1,
            self.buf.cursor_col + 1,
        )

    def _save_as(self):
        filename = self._prompt(_SAVE_AS_LABEL, self.filename or "")
        if not filename:
            self.status_msg = "Save cancelled"
            return

        filename = os.path.expanduser(filename)
        if self._save(filename):
            self.filename = filename

    def _save(self, filename):
        # Saves the buffer and reports the result on the status line. Returns
        # True on success and False on failure.

        try:
            self.status_msg = fileio.save(filename, self.buf)
            return True
        except OSError as e:
            self.status_msg = "Error saving to '{}': {} (errno: {})".format(
                filename, e.strerror, errno.errorcode.get(e.errno, e.errno)
            )
            return False

    def _prompt(self, label, initial_text):
        # Reads a line of text on the status line. Returns the entered string,
        # or None if the prompt was cancelled with Ctrl-X or end of input.
        #
        # Arrow keys are ignored. The entered text is edited only at its end.

        s = os.fsencode(initial_text)
        label = label.encode("ascii")

        while True:
            lines, cols = self._term.size()
            draw_status(
                self._term.write, Screen(lines, cols), label + s, self.colors["status"]
            )
            if lines > 0:
                col = min(len(label) + len(s), cols) + 1
                self._term.write(SHOW_CURSOR + cursor_position(lines, col))
            self._term.flush()

            c = self._decoder.next(self._term.read_byte)

            if c is None or c == Key.QUIT:
                return None

            if c in _NEWLINES:
                return os.fsdecode(s)

            if c == Key.BACKSPACE:
                s = s[:-1]

            elif isinstance(c, bytes) and c[0] >= 0x20:
                s += c


def main():
    parser = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter, description=__doc__
    )

    parser.add_argument(
        "filename", metavar="FILE", nargs="?", help="File to edit (created on save)"
    )

    parser.add_argument(
        "--tab-size",
        type=int,
        default=TAB_SIZE,
        help=f"Spaces per indent level (default: {TAB_SIZE})",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args()

    if args.tab_size < 1:
        parser.error("--tab-size must be at least 1")

    colors = parse_style(os.environ.get(_STYLE_ENV, ""))

    if args.filename and os.path.exists(args.filename):
        try:
            buf = fileio.load(args.filename, tab_size=args.tab_size)
        except OSError as e:
            sys.exit(f"error: couldn't load '{args.filename}': {e.strerror}")
    else:
        buf = TextBuffer(tab_size=args.tab_size)

    editor = Editor(buf, args.filename, colors)
    try:
        rawterm.run(editor.run)
    except RuntimeError as e:
        sys.exit(f"error: {e}")


if __name__ == "__main__":
    main()
