from .app_config import AppConfig
from .log_config import LogConfig
from .tracker_config import RunningOverlap, TrackerConfig

__all__ = ["AppConfig", "LogConfig", "RunningOverlap", "TrackerConfig"]
