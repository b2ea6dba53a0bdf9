"""Profile the update and draw steps using :mod:`digital_rain.perf`.

Run with::

    PYTHONPATH=src python examples/profile_frames.py

Frames are rendered into an in-memory stream, so the terminal is left alone.
Pass ``--help`` to see options for the grid size and frame count.
"""

from __future__ import annotations

import argparse
import io
import logging

from digital_rain import engine
from digital_rain.grid import Grid
from digital_rain.perf import FrameProfiler, format_summary
from digital_rain.renderer import Renderer


LOGGER = logging.getLogger(__name__)


def run_frames(rows: int, cols: int, frames: int, profiler: FrameProfiler, seed: int = 42) -> int:
    """Animate a headless grid and return the number of bytes rendered."""

    grid = Grid.create(rows, cols, seed=seed)
    stream = io.BytesIO()
    renderer = Renderer(stream)
    for _ in range(frames):
        with profiler.section("update"):
            engine.step(grid)
        with profiler.section("draw"):
            renderer.draw(grid)
        profiler.end_frame()
    return stream.tell()


def print_summary(profiler: FrameProfiler) -> None:
    summary = profiler.summary()
    if not summary:
        print("No timings recorded.")
        return
    width = max(len(row["name"]) for row in summary)
    header = f"{'Section':<{width}}  Total (ms)  Avg (ms)  Max (ms)  Count"
    print(header)
    print("-" * len(header))
    for row in summary:
        print(
            f"{row['name']:<{width}}  {row['total'] * 1000.0:10.3f}  {row['average'] * 1000.0:8.3f}"
            f"  {row['max'] * 1000.0:8.3f}  {int(row['count']):5d}"
        )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--rows", type=int, default=50, help="Grid height in cells.")
    parser.add_argument("--cols", type=int, default=200, help="Grid width in cells.")
    parser.add_argument("--frames", type=int, default=500, help="Number of frames to render.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    profiler = FrameProfiler()
    written = run_frames(args.rows, args.cols, args.frames, profiler)
    LOGGER.info("Rendered %d frames (%d bytes): %s", profiler.frames, written, format_summary(profiler.summary()))
    print_summary(profiler)


if __name__ == "__main__":
    main()
