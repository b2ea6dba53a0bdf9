import pytest

from digital_rain.perf import FrameProfiler, format_summary


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def test_sections_record_basic_stats():
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with profiler.section("draw"):
        clock.advance(0.004)
    with profiler.section("draw"):
        clock.advance(0.002)
    row = profiler.summary()[0]
    assert row["name"] == "draw"
    assert row["count"] == 2
    assert row["total"] == pytest.approx(0.006)
    assert row["average"] == pytest.approx(0.003)
    assert row["min"] == pytest.approx(0.002)
    assert row["max"] == pytest.approx(0.004)


def test_summary_orders_slowest_first():
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with profiler.section("update"):
        clock.advance(0.001)
    with profiler.section("draw"):
        clock.advance(0.005)
    assert [row["name"] for row in profiler.summary()] == ["draw", "update"]


def test_section_records_time_when_body_raises():
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with pytest.raises(RuntimeError):
        with profiler.section("draw"):
            clock.advance(0.5)
            raise RuntimeError("boom")
    assert profiler.summary()[0]["total"] == pytest.approx(0.5)


def test_disabled_profiler_and_reset():
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock, enabled=False)
    with profiler.section("ignored"):
        clock.advance(0.4)
    assert profiler.summary() == []
    profiler.enabled = True
    with profiler.section("active"):
        clock.advance(0.2)
    assert profiler.end_frame() == 1
    profiler.reset()
    assert profiler.summary() == []
    assert profiler.frames == 0


def test_format_summary():
    assert format_summary([]) == "No timings recorded."
    clock = FakeClock()
    profiler = FrameProfiler(clock=clock)
    with profiler.section("update"):
        clock.advance(0.0015)
    text = format_summary(profiler.summary())
    assert text == "update: avg=1.500ms, max=1.500ms, count=1"
