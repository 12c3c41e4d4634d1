# topmark:header:start
#
#   project      : MediaConf
#   file         : logging.py
#   file_relpath : src/mediaconf/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf logging: a TRACE level below DEBUG and chalk-colored records.

Modules obtain their logger with [`get_logger`][mediaconf.config.logging.get_logger];
the loader reports shape selection and dispatch tables at TRACE.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, Final, cast

from yachalk import chalk

from mediaconf.constants import ENV_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

# highest threshold first
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
)

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class MediaconfLogger(logging.Logger):
    """Logger with a ``trace()`` method."""

    def trace(self, msg: object, *args: object) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(MediaconfLogger)


class ChalkFormatter(logging.Formatter):
    """Color each formatted record by severity (TRACE records are blue)."""

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for threshold, color in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return color(message)
        return chalk.blue(message)


def resolve_env_log_level(environ: Mapping[str, str] | None = None) -> int | None:
    """Return the level named by ``MEDIACONF_LOG_LEVEL``.

    Accepts a level name (``TRACE``, ``DEBUG``, ...) or a number.

    Args:
        environ (Mapping[str, str] | None): Environment to read; defaults to ``os.environ``.

    Returns:
        int | None: The level, or None when unset or unrecognized.
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    value: str = env.get(ENV_LOG_LEVEL, "").strip().upper()
    if value.isdigit():
        return int(value)
    return _LEVEL_NAMES.get(value)


def setup_logging(level: int | None = None) -> None:
    """Route the root logger to stdout through a `ChalkFormatter`.

    Without ``level`` the environment decides, falling back to CRITICAL.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    fmt: str = LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT
    handler.setFormatter(ChalkFormatter(fmt))
    root_logger.addHandler(handler)


def get_logger(name: str) -> MediaconfLogger:
    """Return the `MediaconfLogger` named ``name``."""
    return cast("MediaconfLogger", logging.getLogger(name))
