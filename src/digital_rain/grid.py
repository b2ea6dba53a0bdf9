"""Cell grid holding the falling characters."""

from __future__ import annotations

import time
from typing import NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray


# Alphabet used for freshly spawned characters.
CHARACTER_SET = "qwertyuiopasdfghjklzxcvbnmMNBVCXZLKJHGFDSAPOIUYTREWQ1234567890"

BLANK = " "
BLANK_CODE = ord(BLANK)

Buffer = NDArray[np.uint8]

_CHARACTER_CODES = np.frombuffer(CHARACTER_SET.encode("ascii"), dtype=np.uint8)


class TerminalSize(NamedTuple):
    """Visible terminal area in character cells."""

    rows: int
    cols: int


def create_blank_buffer(rows: int, cols: int) -> Buffer:
    """Return a new flat buffer of ``rows * cols`` blank cells.

    Raises:
        ValueError: If either dimension is not strictly positive.
    """

    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
    return np.full(rows * cols, BLANK_CODE, dtype=np.uint8)


class Grid:
    """Row-major character buffer plus the random source feeding it.

    The buffer is a flat ``uint8`` array of ASCII codes so the renderer can
    hand cells straight to a byte stream.  ``len(buffer) == rows * cols``
    holds after every public operation.
    """

    def __init__(self, rows: int, cols: int, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = int(time.time())
        self.buffer: Buffer = create_blank_buffer(rows, cols)
        self.rows = rows
        self.cols = cols
        self.rng = np.random.default_rng(seed)

    @classmethod
    def create(cls, rows: int, cols: int, seed: Optional[int] = None) -> "Grid":
        return cls(rows, cols, seed=seed)

    @classmethod
    def from_terminal(cls, terminal, seed: Optional[int] = None) -> "Grid":
        """Size a new grid from ``terminal.get_size()``.

        Any ``TerminalError`` raised by the query propagates to the caller.
        """

        size = terminal.get_size()
        return cls(size.rows, size.cols, seed=seed)

    @property
    def size(self) -> TerminalSize:
        return TerminalSize(self.rows, self.cols)

    def resize(self, rows: int, cols: int) -> None:
        """Reallocate for ``rows`` x ``cols`` and blank every cell.

        Previous contents are discarded.
        """

        self.buffer = create_blank_buffer(rows, cols)
        self.rows = rows
        self.cols = cols

    def random_character(self) -> str:
        """Return one character drawn uniformly from ``CHARACTER_SET``."""

        return CHARACTER_SET[int(self.rng.integers(len(CHARACTER_SET)))]

    def random_codes(self, count: int) -> Buffer:
        """Return ``count`` character codes drawn uniformly from ``CHARACTER_SET``."""

        return _CHARACTER_CODES[self.rng.integers(len(CHARACTER_SET), size=count)]

    def _index(self, row: int, col: int) -> int:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return row * self.cols + col
        raise IndexError("Cell out of bounds")

    def cell(self, row: int, col: int) -> str:
        """Return the character at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """

        return chr(self.buffer[self._index(row, col)])

    def set_cell(self, row: int, col: int, char: str) -> None:
        """Store ``char`` at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """

        self.buffer[self._index(row, col)] = ord(char)

    def row_text(self, row: int) -> str:
        if not 0 <= row < self.rows:
            raise IndexError("Row out of bounds")
        start = row * self.cols
        return self.buffer[start:start + self.cols].tobytes().decode("ascii")

    def is_blank(self) -> bool:
        return bool(np.all(self.buffer == BLANK_CODE))
