"""Logging bootstrap for the CLI.

Installs a single Rich handler on the package logger. Library code only
creates module loggers and never configures handlers itself.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "letta_switch"
LEVEL_ENV = "LETTA_SWITCH_LOG_LEVEL"


def _resolve_level(level: Optional[str]) -> int:
    name = level or os.environ.get(LEVEL_ENV)
    if not name:
        name = "DEBUG" if os.environ.get("DEBUG") else "WARNING"
    return getattr(logging, name.upper(), logging.WARNING)


def init_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_resolve_level(level))
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
