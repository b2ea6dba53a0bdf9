"""Per-frame update rule: drops fall one row and new ones spawn at the top."""

from __future__ import annotations

import numpy as np

from .grid import BLANK_CODE, Grid


# Probability that a top-row cell receives a new character on a given frame.
SPAWN_CHANCE = 0.05


def _cell_rows(grid: Grid) -> np.ndarray:
    """Return a ``(rows, cols)`` view over the usable part of the buffer.

    Rows whose indices would fall outside the buffer (stale dimensions after a
    resize) are left out rather than raising.
    """

    rows = min(grid.rows, len(grid.buffer) // grid.cols)
    return grid.buffer[: rows * grid.cols].reshape(rows, grid.cols)


def shift_down(grid: Grid) -> None:
    """Move every cell one row down, leaving the top row blank.

    Rows are copied bottom-to-top so a character advances at most once per
    frame.  The last row takes whatever falls into it from the row above and
    what it held before leaves the screen, even when a blank falls in; the
    leading edge is never left holding a character nobody refreshed.
    """

    cells = _cell_rows(grid)
    for row in range(cells.shape[0] - 1, 0, -1):
        cells[row] = cells[row - 1]
    if cells.shape[0]:
        cells[0] = BLANK_CODE


def spawn_top_row(grid: Grid, spawn_chance: float = SPAWN_CHANCE) -> int:
    """Seed new drops into the top row and return how many were placed.

    Each column independently gets a fresh random character with probability
    ``spawn_chance``; every other top-row cell is blanked.
    """

    cells = _cell_rows(grid)
    if not cells.shape[0]:
        return 0
    spawned = grid.rng.random(grid.cols) < spawn_chance
    count = int(np.count_nonzero(spawned))
    top = cells[0]
    top[~spawned] = BLANK_CODE
    if count:
        top[spawned] = grid.random_codes(count)
    return count


def step(grid: Grid, spawn_chance: float = SPAWN_CHANCE) -> int:
    """Advance ``grid`` by one frame and return the number of new drops."""

    shift_down(grid)
    return spawn_top_row(grid, spawn_chance)
