"""Logging setup for **PageScout**.

One project logger, ``PageScout``, with a stdout handler and an optional
rotating log file. Modules log through children of it::

      from page_scout.logger import get_logger
      log = get_logger("crawler")      # -> "PageScout.crawler"

The CLI calls :func:`init_logging` once per invocation; :func:`configure`
can be called again at any time to change level, format or destination.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "PageScout"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024

_LevelT = Union[int, str]


def _build_handlers(fmt: str, log_file: str | Path | None) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_LOG_BYTES, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Extra rotating log file; *None* keeps output on stdout only.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        Drop previously installed handlers first.
    """
    project = logging.getLogger(LOGGER_NAME)
    project.setLevel(level)
    if replace_handlers:
        for handler in list(project.handlers):
            project.removeHandler(handler)
            handler.close()
    for handler in _build_handlers(log_format, log_file):
        project.addHandler(handler)
    project.propagate = False
    return project


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


def get_logger(suffix: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{suffix}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger", "LOGGER_NAME", "DEFAULT_FORMAT"]
