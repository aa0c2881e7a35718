# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

from routine.configuration import APP_NAME


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """
    Configure the package logger once per process.

    Every module logs through ``logging.getLogger(__name__)``, so all records
    propagate to the ``routine`` logger configured here. Output goes to stderr
    to keep report tables on stdout clean.
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level.upper())

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
