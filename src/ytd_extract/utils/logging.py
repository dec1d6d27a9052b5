"""Logging setup for command-line use.

Library modules only create loggers (``logging.getLogger(__name__)``);
handlers are installed here, by the CLI, and never on import.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER: str = "ytd_extract"


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Route ``ytd_extract`` logs to stderr through Rich.

    Calling this more than once replaces the previously installed handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
