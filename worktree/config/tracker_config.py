# worktree/config/tracker_config.py
from enum import Enum

from pydantic import BaseModel


class RunningOverlap(str, Enum):
    """
    How a still-running interval answers a range query.

    THROUGH_NOW : the clock's "now" is the open end of the interval
    ZERO        : nothing is counted until the interval is stopped
    """
    THROUGH_NOW = "through_now"
    ZERO = "zero"


class TrackerConfig(BaseModel):
    running_overlap: RunningOverlap = RunningOverlap.THROUGH_NOW
