"""Logging setup for spent.

Modules create their own loggers with ``logging.getLogger(__name__)``; the
CLI calls ``configure_logging`` once to route records through rich.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "SPENT_LOG_LEVEL"

_configured = False


def resolve_level(verbose: bool = False) -> int:
    """Pick the log level from the verbose flag or SPENT_LOG_LEVEL."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int = logging.WARNING) -> None:
    """Install a single RichHandler on the ``spent`` logger.

    Repeated calls only adjust the level.
    """
    global _configured

    logger = logging.getLogger("spent")
    logger.setLevel(level)
    if _configured:
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    _configured = True
