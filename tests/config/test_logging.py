# topmark:header:start
#
#   project      : MediaConf
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE level, level resolution and the chalk formatter."""

from __future__ import annotations

import logging

import pytest
from yachalk import chalk

from mediaconf.config.logging import (
    LOG_FORMAT,
    TRACE_LEVEL,
    ChalkFormatter,
    MediaconfLogger,
    get_logger,
    resolve_env_log_level,
)
from mediaconf.constants import ENV_LOG_LEVEL
from tests.conftest import parametrize


@parametrize(
    ("value", "expected"),
    [
        ("trace", TRACE_LEVEL),
        (" Debug ", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("15", 15),
        ("", None),
        ("loud", None),
    ],
)
def test_resolve_env_log_level(value: str, expected: int | None) -> None:
    assert resolve_env_log_level({ENV_LOG_LEVEL: value}) == expected


def test_resolve_env_log_level_unset() -> None:
    assert resolve_env_log_level({}) is None


def test_trace_level_is_named() -> None:
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_get_logger_returns_trace_capable_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("mediaconf.tests.trace")
    assert isinstance(logger, MediaconfLogger)
    with caplog.at_level(TRACE_LEVEL, logger="mediaconf.tests.trace"):
        logger.trace("dispatch %s", "table")
    assert [(r.levelname, r.getMessage()) for r in caplog.records] == [("TRACE", "dispatch table")]


@parametrize(
    ("level", "color"),
    [
        (logging.CRITICAL, chalk.red),
        (logging.WARNING, chalk.yellow),
        (logging.INFO, chalk.green),
        (logging.DEBUG, chalk.gray),
        (TRACE_LEVEL, chalk.blue),
    ],
)
def test_chalk_formatter_colors_by_severity(level: int, color: object) -> None:
    record = logging.LogRecord("x", level, __file__, 1, "hello", None, None)
    formatted = ChalkFormatter(LOG_FORMAT).format(record)
    plain = f"[{logging.getLevelName(level)}] hello"
    assert formatted == color(plain)  # type: ignore[operator]
