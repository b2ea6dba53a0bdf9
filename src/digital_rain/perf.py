"""Light-weight frame timing helpers."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional


@dataclass
class SectionStat:
    """Aggregated timing information for one labelled frame section."""

    count: int = 0
    total: float = 0.0
    min_time: Optional[float] = None
    max_time: float = 0.0

    def add(self, elapsed: float) -> None:
        self.count += 1
        self.total += elapsed
        if self.min_time is None or elapsed < self.min_time:
            self.min_time = elapsed
        if elapsed > self.max_time:
            self.max_time = elapsed

    @property
    def average(self) -> float:
        return self.total / self.count if self.count else 0.0


class FrameProfiler:
    """Collect per-section timings across animation frames."""

    def __init__(self, *, clock: Optional[Callable[[], float]] = None, enabled: bool = True) -> None:
        self._clock = clock or time.perf_counter
        self.enabled = enabled
        self.frames = 0
        self._stats: Dict[str, SectionStat] = {}

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the body of the ``with`` block under ``name``."""

        if not self.enabled:
            yield
            return
        start = self._clock()
        try:
            yield
        finally:
            self._stats.setdefault(name, SectionStat()).add(self._clock() - start)

    def end_frame(self) -> int:
        """Count a completed frame and return the running total."""

        self.frames += 1
        return self.frames

    def reset(self) -> None:
        self.frames = 0
        self._stats.clear()

    def summary(self) -> List[Dict[str, float | int]]:
        """Return one row per section, slowest total first."""

        items = sorted(self._stats.items(), key=lambda item: item[1].total, reverse=True)
        return [
            {
                "name": name,
                "count": stat.count,
                "total": stat.total,
                "average": stat.average,
                "min": stat.min_time if stat.min_time is not None else 0.0,
                "max": stat.max_time,
            }
            for name, stat in items
        ]


def format_summary(summary: List[Dict[str, float | int]]) -> str:
    """Render ``summary`` rows as a single log-friendly line."""

    if not summary:
        return "No timings recorded."
    return "; ".join(
        f"{row['name']}: avg={row['average'] * 1000.0:.3f}ms, "
        f"max={row['max'] * 1000.0:.3f}ms, count={int(row['count'])}"
        for row in summary
    )


__all__ = ["SectionStat", "FrameProfiler", "format_summary"]
