"""Terminal capabilities the animation depends on.

Provides:

- :class:`Terminal`: the interface (size query, ANSI opt-in, interrupt hook)
- :class:`PosixTerminal`: ``os.get_terminal_size`` and POSIX signals
- :class:`WindowsTerminal`: console APIs through :mod:`ctypes`
- :func:`default_terminal`: picks the implementation for this platform
"""

from __future__ import annotations

import logging
import os
import signal
import sys
from abc import ABC, abstractmethod
from ctypes import Structure, byref, c_short, c_uint, c_ushort
from typing import Callable, Optional

from .grid import TerminalSize


logger = logging.getLogger(__name__)

InterruptHandler = Callable[[int, object], None]


class TerminalError(OSError):
    """Raised when the terminal handle or its size cannot be obtained."""


def _validated(rows: int, cols: int) -> TerminalSize:
    if rows <= 0 or cols <= 0:
        raise TerminalError(f"Terminal reported an unusable size of {rows}x{cols}")
    return TerminalSize(rows, cols)


def _interrupt_signals() -> list[int]:
    signals = [signal.SIGINT]
    if hasattr(signal, "SIGTERM"):
        signals.append(signal.SIGTERM)
    return signals


class Terminal(ABC):
    """Minimal terminal interface used by the animation loop."""

    @abstractmethod
    def get_size(self) -> TerminalSize:
        """Return the visible size in cells.

        Raises:
            TerminalError: If the size cannot be queried or is zero.
        """

    @abstractmethod
    def enable_ansi(self) -> None:
        """Opt in to ANSI escape processing where the host requires it.

        Best effort: failures are logged and otherwise ignored.
        """

    def on_interrupt(self, callback: InterruptHandler) -> None:
        """Install ``callback`` process-wide for interrupt and terminate signals."""

        for signum in _interrupt_signals():
            signal.signal(signum, callback)


class PosixTerminal(Terminal):
    """Terminal attached to a POSIX file descriptor (stdout by default)."""

    def __init__(self, fd: Optional[int] = None) -> None:
        self.fd = fd

    def get_size(self) -> TerminalSize:
        try:
            fd = sys.stdout.fileno() if self.fd is None else self.fd
            size = os.get_terminal_size(fd)
        except (OSError, ValueError) as exc:
            raise TerminalError(f"Cannot query terminal size: {exc}") from exc
        return _validated(size.lines, size.columns)

    def enable_ansi(self) -> None:
        # POSIX terminals interpret escape sequences natively.
        return None


# Win32 console constants
STD_OUTPUT_HANDLE = -11
INVALID_HANDLE_VALUE = -1
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004


class COORD(Structure):
    _fields_ = [("X", c_short), ("Y", c_short)]


class SMALL_RECT(Structure):
    _fields_ = [("Left", c_short), ("Top", c_short), ("Right", c_short), ("Bottom", c_short)]


class CONSOLE_SCREEN_BUFFER_INFO(Structure):
    _fields_ = [
        ("dwSize", COORD),
        ("dwCursorPosition", COORD),
        ("wAttributes", c_ushort),
        ("srWindow", SMALL_RECT),
        ("dwMaximumWindowSize", COORD),
    ]


class WindowsTerminal(Terminal):
    """Terminal backed by the Win32 console of the standard output handle."""

    def __init__(self, kernel32=None) -> None:
        if kernel32 is None:
            from ctypes import windll  # type: ignore[attr-defined]

            kernel32 = windll.kernel32
        self.kernel32 = kernel32

    def _handle(self):
        handle = self.kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        # GetStdHandle returns NULL or INVALID_HANDLE_VALUE without a console.
        if handle in (None, 0, INVALID_HANDLE_VALUE):
            raise TerminalError("GetStdHandle returned invalid handle")
        return handle

    def get_size(self) -> TerminalSize:
        handle = self._handle()
        info = CONSOLE_SCREEN_BUFFER_INFO()
        if not self.kernel32.GetConsoleScreenBufferInfo(handle, byref(info)):
            raise TerminalError("GetConsoleScreenBufferInfo failed")
        window = info.srWindow
        return _validated(window.Bottom - window.Top + 1, window.Right - window.Left + 1)

    def enable_ansi(self) -> None:
        try:
            handle = self._handle()
        except TerminalError:
            logger.debug("No console handle; leaving ANSI processing unchanged")
            return
        mode = c_uint()
        if not self.kernel32.GetConsoleMode(handle, byref(mode)):
            logger.debug("GetConsoleMode failed; assuming ANSI is supported")
            return
        if not self.kernel32.SetConsoleMode(handle, c_uint(mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING)):
            logger.debug("SetConsoleMode failed; assuming ANSI is supported")


def default_terminal() -> Terminal:
    """Return the terminal implementation for the running platform."""

    if os.name == "nt":
        return WindowsTerminal()
    return PosixTerminal()


__all__ = [
    "Terminal",
    "TerminalError",
    "PosixTerminal",
    "WindowsTerminal",
    "default_terminal",
]
