"""
Logging Utilities

Root logger setup for a walkthrough run (console plus an optional rotating
log file in the run directory) and a timed step helper.
"""

from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Optional
import logging
import sys
import time


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty below WARNING
NOISY_LOGGERS = ['joblib', 'matplotlib', 'PIL', 'urllib3']

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the root logger for a run.

    Handlers left by a previous call are closed and replaced, so calling this
    once per run never duplicates lines.

    Args:
        log_level: Level name for the root logger and every handler
        log_file: Rotating log file path; its directory is created
        console: Also log to stdout
        log_format: ``logging.Formatter`` format string

    Returns:
        The root logger
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers = []
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8',
        ))

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


@contextmanager
def log_step(logger: logging.Logger, step: str) -> Iterator[None]:
    """
    Log the start, duration and failure of one walkthrough step.

    Usage:
        with log_step(logger, "Train models"):
            ...
    """
    logger.info(f"STEP | {step}")
    start = time.perf_counter()
    try:
        yield
    except Exception:
        logger.error(f"STEP | {step} failed after {time.perf_counter() - start:.2f}s")
        raise
    logger.info(f"STEP | {step} done in {time.perf_counter() - start:.2f}s")
