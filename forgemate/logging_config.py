"""Logging setup shared by all forgemate modules.

Modules call ``get_logger(__name__)``; the CLI calls ``configure_logging``
once to attach a rich handler to the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "forgemate"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Attach a RichHandler to the package logger.

    Args:
        level: Logging level name or number.

    Returns:
        The configured package logger.
    """
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    logger.setLevel(level)
    return logger
