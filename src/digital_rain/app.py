"""Animation lifecycle: startup, the frame loop and interrupt shutdown.

The loop owns the :class:`~digital_rain.grid.Grid` and its random source.
The interrupt path only ever touches :data:`restore_writer`, a process-wide
object that knows the raw output descriptor and nothing about the grid.
"""

from __future__ import annotations

import logging
import os
import time
from typing import BinaryIO, Callable, Optional

from . import engine
from .grid import Grid
from .perf import FrameProfiler, format_summary
from .renderer import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR, Renderer
from .terminal import Terminal


logger = logging.getLogger(__name__)

# Seconds slept after every frame (about 50 frames per second).
FRAME_INTERVAL = 0.020

RESTORE_SEQUENCE = SHOW_CURSOR + CLEAR_SCREEN


class RestoreWriter:
    """Emergency writer used from the signal handler.

    ``restore`` writes straight to the file descriptor with :func:`os.write`
    so it never re-enters the buffered stream the frame loop may be writing
    to, then ends the process with status 0.
    """

    def __init__(self, fd: Optional[int] = None, exit_fn: Callable[[int], None] = os._exit) -> None:
        self.fd = fd
        self.exit_fn = exit_fn

    def restore(self) -> None:
        if self.fd is not None:
            try:
                os.write(self.fd, RESTORE_SEQUENCE)
            except OSError:
                pass
        self.exit_fn(0)

    def handle_signal(self, signum: int, frame: object) -> None:
        self.restore()


# Installed as the interrupt handler by ``RainApp.start``.
restore_writer = RestoreWriter()


class RainApp:
    """Glue the grid, update engine and renderer into a fixed-rate loop."""

    def __init__(
        self,
        terminal: Terminal,
        stream: BinaryIO,
        *,
        seed: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
        profiler: Optional[FrameProfiler] = None,
        profile_every: int = 0,
    ) -> None:
        self.terminal = terminal
        self.stream = stream
        self.renderer = Renderer(stream)
        self.seed = seed
        self.sleep = sleep
        self.profiler = profiler or FrameProfiler(enabled=profile_every > 0)
        self.profile_every = profile_every
        self.grid: Optional[Grid] = None

    def start(self) -> Grid:
        """Prepare the terminal and allocate the grid.

        Raises:
            TerminalError: If the initial size query fails.
        """

        self.renderer.write_now(HIDE_CURSOR)
        self.renderer.write_now(CLEAR_SCREEN)
        try:
            restore_writer.fd = self.stream.fileno()
        except (AttributeError, OSError):
            # In-memory streams have no descriptor to restore.
            restore_writer.fd = None
        self.terminal.on_interrupt(restore_writer.handle_signal)
        self.terminal.enable_ansi()
        self.grid = Grid.from_terminal(self.terminal, seed=self.seed)
        logger.info("Starting rain at %dx%d", self.grid.rows, self.grid.cols)
        return self.grid

    def sync_size(self) -> bool:
        """Resize the grid if the terminal changed; return ``True`` on resize."""

        assert self.grid is not None
        size = self.terminal.get_size()
        if size == self.grid.size:
            return False
        logger.info("Terminal resized from %dx%d to %dx%d", self.grid.rows, self.grid.cols, size.rows, size.cols)
        self.grid.resize(size.rows, size.cols)
        return True

    def frame(self) -> None:
        """Run one poll, update and draw cycle without sleeping."""

        assert self.grid is not None
        self.sync_size()
        with self.profiler.section("update"):
            engine.step(self.grid)
        with self.profiler.section("draw"):
            self.renderer.draw(self.grid)
        frames = self.profiler.end_frame()
        if self.profile_every > 0 and frames % self.profile_every == 0:
            logger.debug("Frames %d: %s", frames, format_summary(self.profiler.summary()))

    def run(self, max_frames: Optional[int] = None) -> None:
        """Animate until interrupted, or for ``max_frames`` frames if given.

        Every error raised while polling, updating or drawing propagates.
        """

        if self.grid is None:
            self.start()
        count = 0
        while max_frames is None or count < max_frames:
            self.frame()
            self.sleep(FRAME_INTERVAL)
            count += 1

    def restore(self) -> None:
        """Show the cursor and clear the screen after a fatal error."""

        self.renderer.write_now(RESTORE_SEQUENCE)
