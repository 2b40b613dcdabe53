# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC
#
# Shared fixtures and helpers for the tined pytest suite.

import os
import sys

import pytest

# Ensure the tined modules are importable from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from textbuf import Row, TextBuffer  # noqa: E402

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep a TINED_STYLE from the outer environment out of the tests."""
    monkeypatch.delenv("TINED_STYLE", raising=False)
    yield


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_buffer(*lines):
    """Return a TextBuffer holding 'lines' (bytes), cursor at the top left."""
    return TextBuffer([Row(line) for line in lines])


def type_bytes(buf, data):
    """Feed every byte of 'data' to buf.insert_char()."""
    for b in data:
        buf.insert_char(b)


def byte_reader(data):
    """Return a read_byte() callable serving 'data', then b"" forever."""
    it = iter(data)

    def read_byte():
        for b in it:
            return bytes((b,))
        return b""

    return read_byte


class FakeTerminal:
    """
    Stands in for rawterm.Terminal: scripted input, captured output and a
    fixed size.
    """

    def __init__(self, keys=b"", lines=24, cols=80):
        self.read_byte = byte_reader(keys)
        self.lines = lines
        self.cols = cols
        self.output = bytearray()
        self.frames = []
        self._pending = bytearray()

    def write(self, data):
        self._pending += data

    def flush(self):
        self.frames.append(bytes(self._pending))
        self.output += self._pending
        self._pending = bytearray()

    def size(self):
        return self.lines, self.cols
