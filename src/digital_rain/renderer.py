"""ANSI renderer writing whole frames to a binary stream."""

from __future__ import annotations

from typing import BinaryIO

from .grid import BLANK_CODE, Grid


SAVE_CURSOR = b"\x1b[s"
RESTORE_CURSOR = b"\x1b[u"
CURSOR_HOME = b"\x1b[H"
HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CLEAR_SCREEN = b"\x1b[2J\x1b[H"

# Bright red for the bottom row, bright green for drops above it.
LEADING_EDGE_COLOR = b"\x1b[91m"
TRAIL_COLOR = b"\x1b[92m"
RESET_COLOR = b"\x1b[0m"


def render_frame(grid: Grid) -> bytes:
    """Return the colored cell stream for ``grid`` without cursor control.

    Rows are separated by a single ``\\n``.  Every cell is preceded by its
    color selector: the bottom row always uses the leading-edge color, other
    rows use the trail color for drops and the reset color for blanks.
    """

    out = bytearray()
    cols = grid.cols
    last_row = grid.rows - 1
    for index, code in enumerate(grid.buffer.tobytes()):
        row, col = divmod(index, cols)
        if col == 0 and index != 0:
            out += b"\n"
        if row == last_row:
            out += LEADING_EDGE_COLOR
        elif code != BLANK_CODE:
            out += TRAIL_COLOR
        else:
            out += RESET_COLOR
        out.append(code)
    return bytes(out)


class Renderer:
    """Draw frames onto ``stream`` from the top-left corner.

    The cursor is saved and sent home before the frame and restored after it.
    The home sequence is flushed on its own so the terminal starts
    overwriting from a known origin while the rest of the frame is built.
    Write and flush errors propagate to the caller.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def draw(self, grid: Grid) -> None:
        self.stream.write(SAVE_CURSOR + CURSOR_HOME)
        self.stream.flush()
        self.stream.write(render_frame(grid))
        self.stream.write(RESTORE_CURSOR)
        self.stream.flush()

    def write_now(self, data: bytes) -> None:
        """Write ``data`` and flush immediately."""

        self.stream.write(data)
        self.stream.flush()
