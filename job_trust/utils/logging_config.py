"""Logging for the trust engine: one rotating log file plus stdout."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE = "job_trust.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Chatty libraries are held at WARNING unless the app itself runs at DEBUG
QUIET_LOGGERS = ("apscheduler", "sqlalchemy.engine")


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(log_dir: str = "logs", level: int | str = logging.INFO) -> logging.Logger:
    """Configure the ``job_trust`` logger tree.

    Re-running replaces the handlers, so the CLI and the web app can both call
    this without duplicating output.
    """
    level = resolve_level(level)
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("job_trust")
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    # 5MB per file, keep 3 backups
    file_handler = RotatingFileHandler(
        log_path / LOG_FILE,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler(sys.stdout)
    for handler in (file_handler, console_handler):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    library_level = level if level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return logger
