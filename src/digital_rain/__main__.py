"""Terminal digital rain.

Run with: `python -m digital_rain`

The animation fills the terminal and runs until interrupted with Ctrl+C.
The options below only control diagnostics; logging is discarded unless a
log file is given so nothing interferes with the drawn frames.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .app import RainApp
from .terminal import default_terminal


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="digital_rain", description=__doc__)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING); only used with --log-file.",
    )
    parser.add_argument("--log-file", default=None, help="Write diagnostics to this file.")
    parser.add_argument(
        "--profile-every",
        type=int,
        default=0,
        help="Log frame timings every N frames at DEBUG level (0 disables).",
    )
    return parser.parse_args(argv)


def configure_logging(level: str, log_file: Optional[str]) -> None:
    """Send diagnostics to ``log_file`` at ``level``.

    Without a log file records are discarded and ``level`` has no effect.
    """

    if log_file is None:
        package_logger = logging.getLogger("digital_rain")
        if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
            package_logger.addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    app = RainApp(default_terminal(), sys.stdout.buffer, profile_every=max(0, args.profile_every))
    try:
        app.run()
    except Exception:
        LOGGER.exception("Rain stopped by an error")
        try:
            app.restore()
        except OSError:
            # The stream itself is broken; report the original error.
            pass
        raise


if __name__ == "__main__":
    main()
