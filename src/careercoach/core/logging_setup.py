"""Optional file logging for the ``careercoach`` package.

``careercoach --log-file`` attaches a rotating file handler at INFO level so
provider failures (quota, outages, malformed output) are kept on disk even
without ``--debug``.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from careercoach.core.paths import data_dir

_LOG_DIR_NAME = "logs"
_LOG_FILE_NAME = "careercoach.log"
_MAX_BYTES = 2 * 1024 * 1024  # 2 MB per file
_BACKUP_COUNT = 3  # keep 3 rotated copies
_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured_path: Path | None = None


def configure_file_logging(log_dir: Path | None = None) -> Path:
    """Attach a rotating file handler to the ``careercoach`` logger.

    Safe to call multiple times; only configures once. Returns the path to
    the log file.
    """
    global _configured_path
    if _configured_path is not None:
        return _configured_path

    log_dir = log_dir or data_dir() / _LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / _LOG_FILE_NAME

    handler = RotatingFileHandler(
        log_file,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))

    pkg_logger = logging.getLogger("careercoach")
    pkg_logger.addHandler(handler)
    # Ensure messages at INFO+ flow through even when root is WARNING.
    if pkg_logger.level == logging.NOTSET or pkg_logger.level > logging.INFO:
        pkg_logger.setLevel(logging.INFO)

    _configured_path = log_file
    return log_file
