# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC

"""
fileio -- load and save TextBuffers as plain newline-joined text

Files are treated as raw bytes. Rows are separated by b"\\n", with no
separator after the last row, so load() followed by save() reproduces a file
byte for byte (a trailing newline shows up as a final empty row).

Both functions raise OSError on failure and leave reporting to the caller.
save() writes in place: a failed write can leave a partial file behind.
"""

from textbuf import ROW_GROWTH, TAB_SIZE, Row, TextBuffer

# Extra capacity given to each loaded row on top of its length
LOAD_SLACK = ROW_GROWTH


def load(path, tab_size=TAB_SIZE):
    """
    Read the file at 'path' into a new TextBuffer.

    The row array is sized to exactly the number of lines in the file. The
    cursor starts at the top-left corner.
    """
    with open(path, "rb") as f:
        data = f.read()

    lines = data.split(b"\n")
    rows = [Row(line, capacity=len(line) + LOAD_SLACK) for line in lines]
    return TextBuffer(rows, row_capacity=len(rows), tab_size=tab_size)


def save(path, buf):
    """
    Write the rows of 'buf' to 'path', creating or truncating it.

    Returns a message to show on success.
    """
    with open(path, "wb") as f:
        for i, row in enumerate(buf.rows):
            if i:
                f.write(b"\n")
            f.write(row.cells)

    return f"Wrote {buf.size} line{'' if buf.size == 1 else 's'} to '{path}'"
