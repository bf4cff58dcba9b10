"""Package logging for uplan-volumes.

All modules log through the ``uplan_volumes`` logger, which writes to stdout
as ``LEVEL: message``. Debug mode switches to ``LEVEL [module]: message`` so
per-segment diagnostics (solver fallbacks, dropped CSV rows) show where they
came from.

The starting level can be set with ``UPLAN_LOG_LEVEL`` (DEBUG, INFO,
WARNING or ERROR); ``--debug`` on the command line overrides it.
"""

import logging
import os
import sys
from typing import Mapping, Optional

__all__ = [
    'setup_logger',
    'logger',
    'set_debug_mode',
    'level_from_env',
]

LOG_LEVEL_ENV_VAR = 'UPLAN_LOG_LEVEL'
LOG_FORMAT = '%(levelname)s: %(message)s'
DEBUG_LOG_FORMAT = '%(levelname)s [%(module)s]: %(message)s'

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}


def level_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """Logging level named by UPLAN_LOG_LEVEL, INFO when unset or unknown."""
    if environ is None:
        environ = os.environ
    name = environ.get(LOG_LEVEL_ENV_VAR, '').strip().upper()
    return _LEVELS.get(name, logging.INFO)


def _apply_level(target: logging.Logger, level: int) -> None:
    target.setLevel(level)
    fmt = DEBUG_LOG_FORMAT if level <= logging.DEBUG else LOG_FORMAT
    for handler in target.handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))


def setup_logger(
    name: str = 'uplan_volumes',
    level: Optional[int] = None,
    debug: bool = False,
) -> logging.Logger:
    """
    Configure and return a logger writing to stdout.

    Args:
        name: Logger name
        level: Logging level; read from UPLAN_LOG_LEVEL when None
        debug: If True, use DEBUG regardless of level

    Returns:
        Configured logger instance
    """
    target = logging.getLogger(name)

    if debug:
        level = logging.DEBUG
    elif level is None:
        level = level_from_env()

    # Avoid duplicate handlers
    if not target.handlers:
        target.addHandler(logging.StreamHandler(sys.stdout))

    _apply_level(target, level)
    return target


# Global logger instance
logger = setup_logger()


def set_debug_mode(enabled: bool) -> None:
    """Enable or disable debug logging for the package logger.

    Args:
        enabled: True to enable debug mode
    """
    _apply_level(logger, logging.DEBUG if enabled else logging.INFO)
