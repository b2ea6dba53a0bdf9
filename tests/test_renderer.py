from __future__ import annotations

import io

import pytest

from digital_rain.grid import Grid
from digital_rain.renderer import (
    CURSOR_HOME,
    LEADING_EDGE_COLOR,
    RESET_COLOR,
    RESTORE_CURSOR,
    SAVE_CURSOR,
    TRAIL_COLOR,
    Renderer,
    render_frame,
)


class RecordingStream:
    def __init__(self) -> None:
        self.calls: list[tuple[str, bytes]] = []

    def write(self, data: bytes) -> int:
        self.calls.append(("write", bytes(data)))
        return len(data)

    def flush(self) -> None:
        self.calls.append(("flush", b""))


class BrokenStream(RecordingStream):
    def write(self, data: bytes) -> int:
        raise BrokenPipeError("terminal went away")


def sample_grid() -> Grid:
    grid = Grid.create(2, 3, seed=0)
    grid.set_cell(0, 1, "A")
    grid.set_cell(1, 0, "B")
    grid.set_cell(1, 2, "C")
    return grid


def test_frame_colors_rows_and_cells() -> None:
    frame = render_frame(sample_grid())
    expected = (
        RESET_COLOR + b" " + TRAIL_COLOR + b"A" + RESET_COLOR + b" "
        + b"\n"
        + LEADING_EDGE_COLOR + b"B" + LEADING_EDGE_COLOR + b" " + LEADING_EDGE_COLOR + b"C"
    )
    assert frame == expected
    assert frame.count(b"\n") == 1
    assert frame.count(TRAIL_COLOR) == 1
    assert frame.count(LEADING_EDGE_COLOR) == 3


def test_blank_grid_has_newline_between_rows_only() -> None:
    frame = render_frame(Grid.create(3, 2))
    assert frame.count(b"\n") == 2
    assert not frame.startswith(b"\n")
    assert not frame.endswith(b"\n")
    assert TRAIL_COLOR not in frame


def test_draw_flushes_home_before_frame_and_restores_after() -> None:
    stream = RecordingStream()
    Renderer(stream).draw(sample_grid())
    assert stream.calls[0] == ("write", SAVE_CURSOR + CURSOR_HOME)
    assert stream.calls[1] == ("flush", b"")
    assert stream.calls[-2] == ("write", RESTORE_CURSOR)
    assert stream.calls[-1] == ("flush", b"")
    body = b"".join(data for kind, data in stream.calls[2:-2] if kind == "write")
    assert body == render_frame(sample_grid())


def test_draw_to_bytes_stream_concatenates_frame() -> None:
    stream = io.BytesIO()
    grid = sample_grid()
    Renderer(stream).draw(grid)
    assert stream.getvalue() == SAVE_CURSOR + CURSOR_HOME + render_frame(grid) + RESTORE_CURSOR


def test_write_failure_propagates() -> None:
    with pytest.raises(BrokenPipeError):
        Renderer(BrokenStream()).draw(sample_grid())
