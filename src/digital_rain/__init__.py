"""Digital rain animation for ANSI terminals."""

from .grid import BLANK, CHARACTER_SET, Grid, TerminalSize
from .engine import SPAWN_CHANCE, shift_down, spawn_top_row, step
from .renderer import Renderer, render_frame
from .terminal import PosixTerminal, Terminal, TerminalError, WindowsTerminal, default_terminal
from .perf import FrameProfiler, SectionStat
from .app import FRAME_INTERVAL, RainApp, RestoreWriter, restore_writer

__all__ = [
    "BLANK",
    "CHARACTER_SET",
    "Grid",
    "TerminalSize",
    "SPAWN_CHANCE",
    "shift_down",
    "spawn_top_row",
    "step",
    "Renderer",
    "render_frame",
    "Terminal",
    "TerminalError",
    "PosixTerminal",
    "WindowsTerminal",
    "default_terminal",
    "FrameProfiler",
    "SectionStat",
    "FRAME_INTERVAL",
    "RainApp",
    "RestoreWriter",
    "restore_writer",
]
