# topmark:header:start
#
#   project      : MediaConf
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the MediaConf test suite.

Sets up TRACE logging for the whole run, keeps the MediaConf environment variables
from leaking into tests, and provides typed mark wrappers plus shared fixtures.

Notes:
    Tests that need custom implementations use the ``service_loader`` fixture: the
    packaged manifest plus the sample classes from `tests.sample_services`,
    registered under their short class names.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest

from mediaconf.config import logging
from mediaconf.constants import ENV_CONFIG, ENV_LOG_LEVEL, ENV_PATH, ENV_SERVICES
from mediaconf.mime.repository import MimeRepository, get_builtin_repository
from mediaconf.services.loader import ServiceFamily, ServiceLoader
from tests import sample_services

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def clean_mediaconf_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure no MediaConf variable exported in the developer's shell affects a test.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to remove the environment variables.
    """
    for name in (ENV_CONFIG, ENV_PATH, ENV_SERVICES, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def repository() -> MimeRepository:
    """Return the built-in media type repository."""
    return get_builtin_repository()


@pytest.fixture
def service_loader() -> ServiceLoader:
    """Return the packaged services plus the sample implementations used in tests."""
    loader: ServiceLoader = ServiceLoader.builtin()
    for family, classes in sample_services.SAMPLES.items():
        for cls in classes:
            loader.register(family, cls.__name__, cls)
    loader.register(
        ServiceFamily.PARSER, "com.example.Broken", "tests.sample_services:DoesNotExist"
    )
    return loader
