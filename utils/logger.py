# utils/logger.py
import logging
import sys
from pathlib import Path
from typing import Optional
from config.paths import LOG_PATH

# Packages whose module loggers (logging.getLogger(__name__)) get the handlers
PACKAGE_LOGGERS = ("core", "scheduler", "schemas")


def setup_logging(
    log_path: Optional[Path] = LOG_PATH, level: int = logging.INFO
) -> list[logging.Logger]:
    """
    Attach a file handler and a stdout handler to every project package logger.

    Passing ``log_path=None`` only logs to stdout. Calling this more than once
    does not add duplicate handlers.
    """
    loggers = [logging.getLogger(name) for name in PACKAGE_LOGGERS]
    for logger in loggers:
        logger.setLevel(level)

    # Prevent duplicate handlers if called multiple times
    bare = [logger for logger in loggers if not logger.handlers]
    if not bare:
        return loggers

    handlers: list[logging.Handler] = []
    if log_path is not None:
        # Ensure directory exists
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    # Stream handler (stdout -> docker logs)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_formatter = logging.Formatter("[%(levelname)s] %(message)s")
    stream_handler.setFormatter(stream_formatter)
    handlers.append(stream_handler)

    for logger in bare:
        for handler in handlers:
            logger.addHandler(handler)

    return loggers
