"""Logging for website2pdf.

Every module logs through the one ``Website2Pdf`` logger::

    from website2pdf.logger import logger

What ends up there, by level:

* DEBUG: each sitemap download, excluded URLs, missing header/footer
  templates, browser start-up and the per-page steps.
* INFO: sitemap index expansion, the PDF count per sitemap and the run
  summary.
* WARNING: sitemaps that could not be fetched or parsed and were skipped,
  empty sitemaps, pages that failed to print.
* ERROR: the errored URLs in the run summary, a sitemap aborted as a whole.

Output goes to stdout, plus a rotating file when ``--log-file`` is given.
The CLI calls :func:`configure` once the logging options are parsed; each
call replaces the previous handlers.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "Website2Pdf"

_LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _console_handler(fmt: str) -> logging.Handler:
    # resolved at call time: CliRunner swaps sys.stdout per invocation
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _rotating_handler(log_file: Union[str, Path], fmt: str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=_LOG_FILE_MAX_BYTES,
        backupCount=_LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    level: _LevelT = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Point the website2pdf logger at stdout (and *log_file*, if any).

    Handlers from a previous call are closed and dropped, so calling this
    again never duplicates output.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    lg.addHandler(_console_handler(log_format))
    if log_file is not None:
        lg.addHandler(_rotating_handler(log_file, log_format))

    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "DEFAULT_FORMAT", "LOGGER_NAME"]
