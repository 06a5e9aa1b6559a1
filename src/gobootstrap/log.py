"""Logging configuration using Rich.

Library modules log under the ``gobootstrap`` logger; the CLI routes those
records to stderr through a RichHandler.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "gobootstrap"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a RichHandler to the package logger.

    Safe to call more than once; the previous handler is replaced.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    return package_logger
