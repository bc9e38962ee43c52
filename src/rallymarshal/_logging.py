"""Logger setup and stage-call logging for the marshal data pipeline."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

ROOT_LOGGER_NAME = "rallymarshal"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False
_configure_lock = threading.Lock()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the package root logger."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> logging.Logger:
    """Attach console and optional file handlers to the root package logger.

    Handlers are attached once per process; later calls only adjust the level.
    """
    global _configured
    logger = get_logger()
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if _configured:
        return logger

    with _configure_lock:
        if _configured:
            return logger

        formatter = logging.Formatter(LOG_FORMAT)

        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        logger.propagate = False
        _configured = True

    return logger


def log_stage(fn: F) -> F:
    """Decorator that logs a pipeline stage call, its outcome and elapsed time."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(fn.__module__)
        logger.debug("STAGE CALL: %s", fn.__qualname__)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
            elapsed = time.monotonic() - start
            count = len(result) if isinstance(result, (list, tuple)) else 1
            logger.debug(
                "STAGE OK: %s -> %d items (%.3fs)", fn.__qualname__, count, elapsed,
            )
            return result
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.debug(
                "STAGE FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, elapsed,
            )
            raise

    return wrapper  # type: ignore[return-value]
