from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from worktree.config.tracker_config import RunningOverlap
from worktree.core.clock import Clock, SystemClock
from worktree.core.interval import Interval
from worktree.core.job import ZERO, Job, Window
from worktree.utils.errors import StructuralViolationError
from worktree.utils.logger import logs

if TYPE_CHECKING:
    from worktree.core.decorator import TaskDecorator
    from worktree.core.visitor import Visitor


class Task(Job):
    """
    A Job that directly owns Intervals.

    Invariants:
      - at most one interval is running
      - running_interval is set iff that interval exists, and is one of intervals
      - intervals keep insertion order

    add_interval / stop_last_interval are not synchronized against each
    other: callers sharing one Task across threads must serialize them.
    Propagation to ancestors (update_duration) is thread safe.
    """

    def __init__(
        self,
        name: str,
        description: str,
        clock: Optional[Clock] = None,
        running_overlap: RunningOverlap = RunningOverlap.THROUGH_NOW,
    ):
        super().__init__(name, description)
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.running_overlap = RunningOverlap(running_overlap)
        self._intervals: List[Interval] = []
        self._running: Optional[Interval] = None
        self._higher_layer: Optional["TaskDecorator"] = None
        self._invariant()

    def _invariant(self) -> None:
        assert self.description is not None, "Illegal null description"
        assert self.name, "Illegal empty name"
        assert self.duration >= ZERO, "Illegal negative duration"
        running = [i for i in self._intervals if i.is_running]
        assert len(running) <= 1, "More than one running interval"
        assert (self._running is None) == (not running), "Running reference out of sync"

    # --------------------------------------------------
    # intervals
    # --------------------------------------------------
    @property
    def intervals(self) -> Tuple[Interval, ...]:
        return tuple(self._intervals)

    def get_intervals(self) -> Tuple[Interval, ...]:
        return self.intervals

    @property
    def running_interval(self) -> Optional[Interval]:
        return self._running

    def is_running_interval(self) -> bool:
        return self._running is not None

    def add_interval(self, item: Union[str, Interval]):
        """
        add_interval(name) -> Interval | None
            start a new running interval; None when one is already running

        add_interval(interval) -> bool
            append a pre-built interval owned by this task
        """
        if isinstance(item, Interval):
            return self._append_interval(item)
        return self._start_interval(item)

    def _start_interval(self, name: str) -> Optional[Interval]:
        self._invariant()

        if self._running is not None:
            logs.warning(
                f"[Task] {self.name}: interval {self._running.name!r} still running, "
                f"rejecting {name!r}"
            )
            return None

        interval = Interval._open(name, self)
        self._intervals.append(interval)
        self._running = interval

        self._invariant()
        return interval

    def _append_interval(self, interval: Interval) -> bool:
        self._invariant()

        owner = interval.parent_task
        if owner is not self and getattr(owner, "innermost", None) is not self:
            logs.warning(f"[Task] {self.name}: interval {interval.name!r} belongs to another task")
            return False
        if any(i is interval for i in self._intervals):
            return False
        if interval.is_running and self._running is not None:
            logs.warning(
                f"[Task] {self.name}: cannot attach running interval {interval.name!r}, "
                f"{self._running.name!r} is running"
            )
            return False

        self._intervals.append(interval)
        if interval.is_running:
            self._running = interval

        self._invariant()
        return True

    def stop_last_interval(self) -> Optional[timedelta]:
        """
        Stop the running interval and propagate its duration upward.
        Returns None (no-op) when nothing is running.
        """
        self._invariant()

        if self._running is None:
            logs.warning(f"[Task] {self.name}: there is no interval running")
            return None

        interval = self._running
        duration = interval.stop()
        self._running = None

        self.update_duration(duration, interval.start_time, interval.end_time)

        self._invariant()
        return duration

    # --------------------------------------------------
    # range query
    # --------------------------------------------------
    def activity_window(self) -> Optional[Window]:
        window = super().activity_window()
        running = self._running
        if running is None or self.running_overlap is RunningOverlap.ZERO:
            return window

        now = self.clock.now()
        if window is None:
            return running.start_time, now
        return window[0], max(window[1], now)

    def get_duration_in_range(self, from_date: datetime, to_date: datetime) -> timedelta:
        self._validate_range(from_date, to_date)

        total = ZERO
        if not self.overlaps(from_date, to_date):
            return total

        for interval in self._intervals:
            total += interval.get_duration_in_range(from_date, to_date)
        return total

    # --------------------------------------------------
    # traversal
    # --------------------------------------------------
    def accept_visitor(self, visitor: "Visitor") -> None:
        visitor.visit_task(self)
        for interval in self._intervals:
            interval.accept_visitor(visitor)

    # --------------------------------------------------
    # decorator layering
    # --------------------------------------------------
    def set_higher_layer_decorator(self, decorator: "TaskDecorator") -> None:
        if self._higher_layer is not None and self._higher_layer is not decorator:
            raise StructuralViolationError(
                f"{self.name!r} is already wrapped by {self._higher_layer!r}; "
                f"decorate the outermost layer instead"
            )
        self._higher_layer = decorator

    @property
    def higher_layer_decorator(self) -> Optional["TaskDecorator"]:
        return self._higher_layer

    @property
    def outermost(self):
        """Outermost decorator layer wrapping this task, or the task itself."""
        layer = self
        while layer.higher_layer_decorator is not None:
            layer = layer.higher_layer_decorator
        return layer
