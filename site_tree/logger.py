"""Logging setup for SiteTree.

Everything logs through the ``"SiteTree"`` logger. Console output always goes to
stdout; the CLI can add a size-rotated log file with ``--log-file``::

    from site_tree.logger import logger
    logger.info("Crawl started")
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteTree"

#: rotation policy for ``--log-file``
MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
LOG_BACKUPS: Final[int] = 3


def _handlers(log_file: Union[str, Path, None], formatter: logging.Formatter) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Point the SiteTree logger at stdout (and *log_file*, if given).

    With *replace_handlers* the previous handlers are closed first, so calling
    this repeatedly never duplicates output.
    """
    site_logger = logging.getLogger(LOGGER_NAME)
    site_logger.setLevel(level)
    if replace_handlers:
        for old in list(site_logger.handlers):
            site_logger.removeHandler(old)
            old.close()
    for handler in _handlers(log_file, logging.Formatter(log_format)):
        site_logger.addHandler(handler)
    site_logger.propagate = False
    return site_logger


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Fresh configuration from the CLI's ``--log-*`` options."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
