"""Logging setup for the keyteleop controller and stand-in simulator.

Both entry points log through the ``keyteleop`` package logger. Records
go to stderr so they never interleave with the key banner on stdout, and
optionally to a file for sessions whose terminal is in raw mode.
"""

from __future__ import annotations

import logging
import sys

from keyteleop.config.settings import LoggingConfig

PACKAGE_LOGGER = "keyteleop"

# Marks handlers owned by setup_logging so a second call replaces them
_OWNED = "_keyteleop_owned"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure the package logger and return it.

    Calling it again (for example after ``--verbose`` changed the level)
    replaces the handlers from the previous call instead of adding more.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _OWNED, False):
            logger.removeHandler(handler)
            handler.close()

    level = getattr(logging, config.level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file, delay=True))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    logger.debug(
        "Logging at %s to stderr%s",
        logging.getLevelName(level),
        f" and {config.file}" if config.file else "",
    )
    return logger
