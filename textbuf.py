# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC

"""
textbuf -- the text buffer engine behind tined

A TextBuffer is an ordered list of Rows plus a cursor. Every Row is a
growable byte sequence (one byte per screen cell) that remembers how many
indent levels were typed at its start.

Capacities are tracked explicitly and always grow in fixed increments (100
bytes per row, 10 rows per buffer), so growth is amortized and never
exact-fit. Python manages the actual storage; the cached capacities exist so
that growth behavior is observable and testable.

All cursor arithmetic is clamped. Nothing in here wraps around or raises on a
boundary: moving up on the first row, or deleting backward at column 0, is a
no-op.
"""

# Number of spaces inserted for one Tab and reproduced per indent level
TAB_SIZE = 2

# Bytes added to a row's capacity each time it runs out of room
ROW_GROWTH = 100

# Row slots added to a buffer each time it runs out of room
ROWS_GROWTH = 10

# Directions accepted by TextBuffer.move_cursor()
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"

_DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

_NEWLINES = (b"\r", b"\n")


class Row:
    """
    One logical line of text.

    cells:
      bytearray with the row's contents, in visual order. Never contains a
      row separator.

    capacity:
      Allocated length. len(cells) <= capacity always holds.

    tab_depth:
      Number of indent levels applied at the start of the row. This is the
      single source of truth for the row's indent; the indent string is
      always rebuilt from it, never parsed back out of the cells.
    """

    __slots__ = ("cells", "capacity", "tab_depth")

    def __init__(self, data=b"", capacity=None, tab_depth=0):
        self.cells = bytearray(data)
        self.capacity = ROW_GROWTH if capacity is None else capacity
        self.tab_depth = tab_depth
        self.ensure_capacity(len(self.cells))

    def __len__(self):
        return len(self.cells)

    def __bytes__(self):
        return bytes(self.cells)

    def __repr__(self):
        return "Row({!r}, capacity={}, tab_depth={})".format(
            bytes(self.cells), self.capacity, self.tab_depth
        )

    def ensure_capacity(self, n):
        """Grow capacity in ROW_GROWTH steps until it can hold n bytes."""
        while n > self.capacity:
            self.capacity += ROW_GROWTH

    def indent(self, tab_size=TAB_SIZE):
        """Return the indent string implied by tab_depth."""
        return b" " * (self.tab_depth * tab_size)

    def insert(self, i, data):
        self.ensure_capacity(len(self.cells) + len(data))
        self.cells[i:i] = data

    def delete(self, start, end):
        del self.cells[start:end]

    def truncate(self, n):
        """Cut the row at n and return the removed tail."""
        tail = bytes(self.cells[n:])
        del self.cells[n:]
        return tail


class TextBuffer:
    """
    Growable sequence of Rows plus a cursor.

    The buffer always holds at least one row. cursor_row is in
    [0, size - 1] and cursor_col is in [0, len(current row)].
    """

    def __init__(self, rows=None, row_capacity=None, tab_size=TAB_SIZE):
        self.rows = list(rows) if rows else [Row()]
        self.row_capacity = ROWS_GROWTH if row_capacity is None else row_capacity
        self.tab_size = tab_size
        self.cursor_row = 0
        self.cursor_col = 0
        self.ensure_row_capacity(len(self.rows))

    @property
    def size(self):
        return len(self.rows)

    @property
    def current_row(self):
        return self.rows[self.cursor_row]

    def lines(self):
        """Return the contents of every row as a list of bytes objects."""
        return [bytes(row.cells) for row in self.rows]

    def ensure_row_capacity(self, n):
        """Grow row_capacity in ROWS_GROWTH steps until it can hold n rows."""
        while n > self.row_capacity:
            self.row_capacity += ROWS_GROWTH

    def insert_char(self, c):
        """
        Insert the single byte 'c' at the cursor.

        A CR or LF splits the row at the cursor. A Tab inserts tab_size
        spaces and adds one indent level to the row. Anything else is
        inserted literally.
        """
        if isinstance(c, int):
            c = bytes((c,))
        if not isinstance(c, (bytes, bytearray)) or len(c) != 1:
            raise ValueError(f"expected a single byte, got {c!r}")

        if c in _NEWLINES:
            self._split_row()
        elif c == b"\t":
            row = self.current_row
            row.insert(self.cursor_col, b" " * self.tab_size)
            row.tab_depth += 1
            self.cursor_col += self.tab_size
        else:
            self.current_row.insert(self.cursor_col, c)
            self.cursor_col += 1

    def _split_row(self):
        row = self.current_row
        tail = row.truncate(self.cursor_col)
        indent = row.indent(self.tab_size)

        self.ensure_row_capacity(self.size + 1)
        new_row = Row(indent + tail, tab_depth=row.tab_depth)
        self.rows.insert(self.cursor_row + 1, new_row)

        self.cursor_row += 1
        self.cursor_col = len(indent)

    def delete_backward(self):
        """
        Backspace.

        Does nothing at column 0: rows are never joined. When the cursor sits
        right after the row's full indent, one whole indent level is removed.
        Otherwise the byte before the cursor is removed.
        """
        if self.cursor_col == 0:
            return

        row = self.current_row
        indent = row.indent(self.tab_size)
        if (
            row.tab_depth > 0
            and self.cursor_col == len(indent)
            and row.cells[: self.cursor_col] == indent
        ):
            row.delete(self.cursor_col - self.tab_size, self.cursor_col)
            row.tab_depth -= 1
            self.cursor_col -= self.tab_size
            return

        row.delete(self.cursor_col - 1, self.cursor_col)
        self.cursor_col -= 1

    def move_cursor(self, direction):
        """Move the cursor one step. Column moves never cross rows."""
        if direction not in _DIRECTIONS:
            raise ValueError(f"unknown direction {direction!r}")

        if direction == UP:
            self.cursor_row = max(self.cursor_row - 1, 0)
        elif direction == DOWN:
            self.cursor_row = min(self.cursor_row + 1, self.size - 1)
        elif direction == LEFT:
            self.cursor_col = max(self.cursor_col - 1, 0)
        else:
            self.cursor_col = min(self.cursor_col + 1, len(self.current_row))

        self.cursor_col = min(self.cursor_col, len(self.current_row))
