from datetime import datetime, timedelta

import pytest

from worktree import (
    InvalidArgumentError,
    InvalidStateError,
    Interval,
    IntervalState,
    RunningOverlap,
    Task,
)


def _at(h, m):
    return datetime(2025, 12, 1, h, m)


def test_interval_starts_running_at_clock_now(clock, t0):
    task = Task("t", "", clock=clock)
    interval = task.add_interval("work")

    assert interval.state is IntervalState.RUNNING
    assert interval.is_running
    assert interval.start_time == t0
    assert interval.end_time is None


def test_stop_computes_exact_duration(clock, t0):
    task = Task("t", "", clock=clock)
    interval = task.add_interval("work")

    clock.advance(timedelta(minutes=30))
    duration = interval.stop()

    assert duration == timedelta(minutes=30)
    assert interval.state is IntervalState.STOPPED
    assert interval.end_time == t0 + timedelta(minutes=30)
    assert interval.duration == interval.end_time - interval.start_time


def test_stopped_interval_is_immutable(clock):
    task = Task("t", "", clock=clock)
    interval = task.add_interval("work")
    clock.advance(timedelta(minutes=10))
    interval.stop()

    clock.advance(timedelta(hours=1))

    assert interval.duration == timedelta(minutes=10)
    with pytest.raises(InvalidStateError):
        interval.stop()
    assert interval.duration == timedelta(minutes=10)


def test_running_duration_is_elapsed_so_far(clock):
    task = Task("t", "", clock=clock)
    interval = task.add_interval("work")

    clock.advance(timedelta(minutes=7))
    assert interval.duration == timedelta(minutes=7)


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (_at(9, 0), _at(10, 10), timedelta(minutes=10)),   # clipped at the start
        (_at(10, 40), _at(11, 0), timedelta(0)),           # disjoint
        (_at(10, 5), _at(10, 15), timedelta(minutes=10)),  # range inside interval
        (_at(9, 0), _at(11, 0), timedelta(minutes=30)),    # fully contained
        (_at(10, 20), _at(12, 0), timedelta(minutes=10)),  # clipped at the end
        (_at(10, 30), _at(10, 30), timedelta(0)),          # touching the end
    ],
)
def test_duration_in_range(clock, start, end, expected):
    task = Task("t", "", clock=clock)
    interval = Interval.restored("work", task, _at(10, 0), _at(10, 30))

    assert interval.get_duration_in_range(start, end) == expected


def test_duration_in_range_rejects_reversed_range(clock):
    task = Task("t", "", clock=clock)
    interval = Interval.restored("work", task, _at(10, 0), _at(10, 30))

    with pytest.raises(InvalidArgumentError):
        interval.get_duration_in_range(_at(11, 0), _at(9, 0))


def test_running_interval_counts_through_now(clock, t0):
    task = Task("t", "", clock=clock, running_overlap=RunningOverlap.THROUGH_NOW)
    interval = task.add_interval("work")
    clock.advance(timedelta(minutes=20))

    assert interval.get_duration_in_range(t0, t0 + timedelta(hours=1)) == timedelta(minutes=20)
    assert interval.get_duration_in_range(t0 + timedelta(minutes=5), t0 + timedelta(minutes=10)) == timedelta(minutes=5)


def test_running_interval_counts_zero_until_stopped(clock, t0):
    task = Task("t", "", clock=clock, running_overlap=RunningOverlap.ZERO)
    interval = task.add_interval("work")
    clock.advance(timedelta(minutes=20))

    assert interval.get_duration_in_range(t0, t0 + timedelta(hours=1)) == timedelta(0)

    interval.stop()
    assert interval.get_duration_in_range(t0, t0 + timedelta(hours=1)) == timedelta(minutes=20)


def test_restored_interval_validates_bounds(clock):
    task = Task("t", "", clock=clock)

    with pytest.raises(InvalidArgumentError):
        Interval.restored("bad", task, _at(11, 0), _at(10, 0))

    with pytest.raises(InvalidArgumentError):
        Interval.restored("bad", task, _at(10, 0), None)


def test_interval_requires_owning_task(t0):
    with pytest.raises(InvalidArgumentError):
        Interval("orphan", None, t0, t0)


def test_constructed_interval_is_a_stopped_span(clock, t0):
    """
    Contract:
    only Task.add_interval(name) opens a running interval
    """
    task = Task("t", "", clock=clock)
    interval = Interval("old", task, t0, t0 + timedelta(minutes=3))

    assert interval.state is IntervalState.STOPPED
    assert interval.duration == timedelta(minutes=3)
    assert task.is_running_interval() is False

    with pytest.raises(InvalidArgumentError):
        Interval("open", task, t0, None)


class _SteppedClock:
    """Returns the queued instants one by one."""

    def __init__(self, *instants):
        self._instants = list(instants)

    def now(self):
        return self._instants.pop(0)


def test_stop_after_clock_stepped_back_keeps_a_valid_span(captured_logs):
    start = datetime(2025, 11, 2, 1, 55)
    task = Task("t", "", clock=_SteppedClock(start, start - timedelta(minutes=50)))
    task.add_interval("work")

    duration = task.stop_last_interval()

    assert duration == timedelta(0)
    assert task.is_running_interval() is False
    interval = task.get_intervals()[0]
    assert interval.end_time == interval.start_time == start
    assert task.duration == timedelta(0)
    assert any("[Interval] work: clock went backwards" in m for m in captured_logs)
