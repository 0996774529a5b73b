# logger_utils.py - logging setup and timing metrics for the engine

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Union

from rich.logging import RichHandler

# Package root logger, every module logs under it via logging.getLogger(__name__)
ROOT_LOGGER = "aac_autocompleter"

_FILE_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure logging for the package.
    Console output goes through rich; `log_file`, when given, also receives
    plain-text records. Calling it again replaces the previous handlers.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    logger.addHandler(RichHandler(level=level, show_path=False, rich_tracebacks=True))
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
    logger.propagate = False
    return logger


class Log:
    """Small facade for metrics and timed blocks on top of logging."""

    _metrics = logging.getLogger(ROOT_LOGGER + ".metrics")

    @staticmethod
    def metric(tag: str, value, unit: str = "") -> None:
        """
        Record a metric (timing, counts).
        Example: "train done: 0.123s"
        """
        Log._metrics.debug("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label: str) -> "_Timer":
        """
        Measure the execution time of a code block:
            with Log.time_block("train"):
                do_some_work()
        """
        return _Timer(label)


class _Timer:
    """Context manager used by Log.time_block."""

    def __init__(self, label: str):
        self.label = label
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> "_Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self.start
        Log.metric(f"{self.label} done", round(self.elapsed, 4), "s")
