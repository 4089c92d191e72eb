"""Logging for amp-wrapped.

Every module logs through ``amp_wrapped.<name>`` loggers. Output goes to
``<log_dir>/amp-wrapped.log``; ``--verbose`` also mirrors it to stderr.
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "amp-wrapped.log"


def setup_logging(log_dir: Path, level: int = logging.INFO, verbose: bool = False) -> logging.Logger:
    """Attach file (and, if verbose, stderr) handlers to the package logger.

    Calling again replaces the handlers from the previous call, so a second
    run in the same process writes to its own log directory.

    Args:
        log_dir: Directory for the log file, created if missing
        level: Level for the log file
        verbose: Mirror DEBUG output to stderr

    Returns:
        The ``amp_wrapped`` package logger
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("amp_wrapped")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG if verbose else level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    logger.setLevel(logging.DEBUG if verbose else level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one amp-wrapped module, e.g. get_logger("parser")."""
    return logging.getLogger(f"amp_wrapped.{name}")
