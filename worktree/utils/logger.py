#!filepath: worktree/utils/logger.py
import os
import json
from functools import wraps
from time import perf_counter
from loguru import logger
from typing import Callable, Optional


class Logging:
    """
    Thin wrapper over loguru
    ---------------------------------------
    - rotating file sink (rotation / retention)
    - function-level logging decorator (catch)
    - no sink changes unless configure=True
    ---------------------------------------
    The core logs through the module level ``logs`` instance and never
    depends on a sink being installed.
    """

    def __init__(
        self,
        log_dir: Optional[str] = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        configure: bool = True,
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self._sink_id: Optional[int] = None

        if configure:
            self._configure()

    def _configure(self) -> None:
        """
        Install the file sink. Only sinks added by this instance are replaced.
        """
        if self.log_dir is None:
            return

        os.makedirs(self.log_dir, exist_ok=True)

        if self._sink_id is not None:
            logger.remove(self._sink_id)

        self._sink_id = logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,  # safe across threads / processes
            backtrace=True,
            diagnose=True,
        )

        logger.info("-----------Logger initialized successfully.-----------")

    @property
    def configured(self) -> bool:
        return self._sink_id is not None

    # ----------- log methods -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- decorator ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_outputs: bool = False,
        log_time: bool = False,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    logger.info(
                        f"[CALL] {func.__name__} args={args}, kwargs={json.dumps(kwargs, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_outputs:
                    logger.info(f"[RETURN] {func.__name__} result={result}")

                if log_time:
                    cost = perf_counter() - start
                    logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


def init_logging(cfg) -> Logging:
    """
    Configure the global ``logs`` in place from a LogConfig.
    Modules that already imported ``logs`` pick up the new sink.
    """
    logs.log_dir = cfg.dir
    logs.rotation = cfg.rotation
    logs.retention = cfg.retention
    logs.level = cfg.level
    logs._configure()
    return logs


# default global logs (replaced by init_logging)
logs = Logging(configure=False)
