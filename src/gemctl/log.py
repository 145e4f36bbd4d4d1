"""Per-invocation logger construction."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

LOGGER_NAME = "gemctl.cli"


def build_logger(
    level: str = "INFO",
    log_file: str | Path | None = None,
    *,
    verbose: bool = False,
) -> logging.Logger:
    """Return a new logger writing to *log_file* (and stderr when *verbose*).

    The logger is not registered with :mod:`logging`'s global manager, so
    building one never touches the root logger or other invocations' handlers.
    When the log file cannot be opened, records go to stderr instead.
    """
    logger = logging.Logger(LOGGER_NAME, level=logging.getLevelNamesMapping()[level.upper()])
    formatter = logging.Formatter(LOG_FORMAT)

    file_error: OSError | None = None
    if log_file is not None:
        path = Path(log_file).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        except OSError as exc:
            file_error = exc
        else:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    if verbose or file_error is not None or not logger.handlers:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        logger.addHandler(stream)

    if file_error is not None:
        logger.warning("Cannot open log file %s: %s", log_file, file_error)
    return logger


def close_logger(logger: logging.Logger) -> None:
    """Flush, close and detach all handlers of *logger*."""
    for handler in list(logger.handlers):
        handler.flush()
        handler.close()
        logger.removeHandler(handler)
