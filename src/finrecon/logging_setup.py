"""Centralized logging configuration for the ``finrecon`` package.

Entry points call ``configure_logging`` once at startup. Library modules
never attach handlers; they only use ``logging.getLogger(__name__)`` and
inherit the handler installed on the package root logger here.
"""

import logging
import os
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER_NAME = "finrecon"
LOG_LEVEL_ENV = "FINRECON_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def parse_level(level: Union[int, str, None]) -> int:
    """Resolve a level name or number, falling back to the environment.

    Raises:
        ValueError: If the level name is not a standard logging level
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or "WARNING"
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")
    return numeric


def configure_logging(
    level: Union[int, str, None] = None,
    stream: Optional[IO[str]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach a single stream handler to the package root logger.

    Calling this again replaces the previous handler, so repeated CLI
    invocations in one process (as in tests) do not duplicate output.
    """
    numeric_level = parse_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    return logger
