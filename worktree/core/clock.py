from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
# worktree/core/clock.py

from worktree.utils.errors import InvalidArgumentError


class Clock(ABC):
    """
    Source of "now" for interval start / stop.

    - Intervals never call datetime.now() directly
    - Substitutable for deterministic tests and replays
    """

    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemClock(Clock):
    """
    Wall clock in UTC (timezone aware).

    Local time jumps at DST changes; UTC does not.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """
    Deterministic clock.

    Time only moves when the caller moves it, and never backwards.
    """

    def __init__(self, start: datetime):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> datetime:
        if delta < timedelta(0):
            raise InvalidArgumentError(f"clock cannot move backwards: {delta}")
        self._now = self._now + delta
        return self._now

    def set(self, ts: datetime) -> datetime:
        if ts < self._now:
            raise InvalidArgumentError(f"clock cannot move backwards: {ts} < {self._now}")
        self._now = ts
        return self._now
