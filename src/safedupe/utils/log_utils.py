"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/log_utils.py
Attaches a diagnostic stream handler to the package logger.
"""
import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"
PACKAGE_LOGGER = "safedupe"

_HANDLER_NAME = "safedupe-diagnostics"


def _make_handler(stream: Optional[TextIO], level: int) -> logging.Handler:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    return handler


def setup_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Route package log records to `stream` (stderr by default) for the rest of the process.
    verbose=True shows INFO progress and deletion decisions, otherwise only warnings.
    Calling it again replaces the handler instead of stacking a new one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.INFO if verbose else logging.WARNING

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    logger.addHandler(_make_handler(stream, level))
    logger.setLevel(level)
    return logger


@contextmanager
def verbose_logging(stream: Optional[TextIO] = None) -> Iterator[logging.Logger]:
    """
    Show INFO records on `stream` (stderr by default) inside the block only.
    The package logger's level and handlers are restored on exit.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    previous_level = logger.level
    handler = _make_handler(stream, logging.INFO)

    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
