#!filepath: worktree/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .log_config import LogConfig
from .tracker_config import TrackerConfig

LOG_LEVEL_ENV = "WORKTREE_LOG_LEVEL"


def project_root() -> str:
    """
    Repository root derived from this file:
    worktree/config/app_config.py -> worktree/config -> worktree -> root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    tracker: TrackerConfig = TrackerConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - defaults to worktree/config/base.yml
        - independent of the current working directory
        - WORKTREE_LOG_LEVEL overrides log.level
        """
        root = project_root()

        # 1) .env at the project root
        load_dotenv(os.path.join(root, ".env"))

        # 2) resolve the config file
        if path is None:
            path = os.path.join(os.path.dirname(__file__), "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) read YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        level = os.getenv(LOG_LEVEL_ENV)
        if level:
            raw.setdefault("log", {})
            raw["log"]["level"] = level

        return cls(**raw)
