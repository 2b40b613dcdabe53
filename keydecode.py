# Copyright (c) 2026 tined contributors
# SPDX-License-Identifier: ISC

"""
keydecode -- turn a raw byte stream into editor events

The decoder is a three-state machine (normal, ESC seen, CSI seen). It only
recognizes the four arrow-key CSI sequences; any other escape sequence is
silently discarded.

Events are either a Key constant (a str) or a one-byte bytes object to be
inserted into the buffer. CR, LF and Tab are delivered as bytes, since the
text buffer gives them their meaning.
"""

from textbuf import UP, DOWN, LEFT, RIGHT


class Key:
    """Named constants for non-insert events."""

    UP = "key_up"
    DOWN = "key_down"
    LEFT = "key_left"
    RIGHT = "key_right"
    BACKSPACE = "key_backspace"
    SAVE = "key_save"
    SAVE_AS = "key_save_as"
    QUIT = "key_quit"


# Key constant -> TextBuffer.move_cursor() direction
MOVES = {
    Key.UP: UP,
    Key.DOWN: DOWN,
    Key.LEFT: LEFT,
    Key.RIGHT: RIGHT,
}

# Decoder states
NORMAL = 0
ESC_SEEN = 1
CSI_SEEN = 2

_ESC = 0x1B

# Single control bytes handled in the normal state
_CONTROL_KEYS = {
    0x18: Key.QUIT,  # Ctrl-X
    0x13: Key.SAVE,  # Ctrl-S
    0x06: Key.SAVE_AS,  # Ctrl-F
    0x7F: Key.BACKSPACE,
}

# Final bytes of the supported CSI sequences
_CSI_KEYS = {
    ord("A"): Key.UP,
    ord("B"): Key.DOWN,
    ord("C"): Key.RIGHT,
    ord("D"): Key.LEFT,
}


def step(state, byte):
    """
    Feed one byte (an int) to the state machine.

    Returns a (new_state, event) tuple, where event is None if the byte did
    not complete an event.
    """
    if state == ESC_SEEN:
        if byte == ord("["):
            return CSI_SEEN, None
        return NORMAL, None

    if state == CSI_SEEN:
        return NORMAL, _CSI_KEYS.get(byte)

    if byte == _ESC:
        return ESC_SEEN, None

    if byte in _CONTROL_KEYS:
        return NORMAL, _CONTROL_KEYS[byte]

    return NORMAL, bytes((byte,))


class InputDecoder:
    """
    Reads bytes from a byte source until one event is complete.

    The decoder keeps no state between calls: an escape sequence is always
    consumed within a single next() call.
    """

    def next(self, read_byte):
        """
        Return the next event, or None at end of input.

        read_byte:
          Callable returning exactly one byte as a bytes object, or b"" at
          end of input. May block.
        """
        state = NORMAL
        while True:
            b = read_byte()
            if not b:
                return None

            state, event = step(state, b[0])
            if event is not None:
                return event
