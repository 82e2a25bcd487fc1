"""Logging configuration for the over.gg scraper CLI.

Two destinations:

* the console (root logger) shows ``console_level`` and up from every
  logger, with short timestamps;
* a per-run file under ``{data_dir}/logs/`` receives everything the
  ``overgg_scraper`` package logs down to DEBUG, which includes each field
  the extraction engines could not read.

HTTP libraries are noisy at DEBUG; their loggers are held at WARNING.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

PACKAGE_LOGGER = "overgg_scraper"
LOG_FILE_PREFIX = "overgg-scraper"
DEFAULT_QUIET_LOGGERS = ("requests", "urllib3")

CONSOLE_FORMAT = "%(asctime)s %(levelname)-5s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def _replace_handlers(target: logging.Logger, *handlers: logging.Handler) -> None:
    for old in target.handlers[:]:
        target.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    for handler in handlers:
        target.addHandler(handler)


def log_file_path(data_dir: str | Path, when: datetime | None = None) -> Path:
    """Path of the run log for a run started at ``when`` (default: now)."""
    when = when or datetime.now()
    return Path(data_dir) / "logs" / f"{LOG_FILE_PREFIX}-{when:%Y-%m-%d-%H%M%S}.log"


def setup_logging(
    data_dir: str | Path = "data",
    console_level: int = logging.INFO,
    quiet_loggers: Iterable[str] = DEFAULT_QUIET_LOGGERS,
) -> Path:
    """Configure console and run-file logging.

    Handlers already present on the root and package loggers are closed
    and replaced, so repeated calls (e.g. in tests) do not duplicate
    output or leak file handles.

    Args:
        data_dir: Base data directory. ``logs/`` is created inside it.
        console_level: Minimum level for console output.
        quiet_loggers: Third-party logger names held at WARNING.

    Returns:
        Path to the newly created log file.
    """
    log_file = log_file_path(data_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(min(console_level, logging.WARNING))
    _replace_handlers(root, console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    # Package records still propagate to the console handler on root.
    package = logging.getLogger(PACKAGE_LOGGER)
    package.setLevel(logging.DEBUG)
    _replace_handlers(package, file_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    package.debug("Logging to %s", log_file)
    return log_file
