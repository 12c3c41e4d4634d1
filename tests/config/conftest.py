# topmark:header:start
#
#   project      : MediaConf
#   file         : conftest.py
#   file_relpath : tests/config/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for configuration loading tests.

Documents are written as the body of a ``<properties>`` root so each test only spells
out the part it exercises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mediaconf.config.assembler import load_config_text
from mediaconf.errors import ConfigurationError

if TYPE_CHECKING:
    from mediaconf.config.model import MediaConfig
    from mediaconf.services.loader import ServiceLoader


def properties(body: str) -> str:
    """Wrap ``body`` in a ``<properties>`` root element."""
    return f"<properties>{body}</properties>"


def load_body(body: str, loader: ServiceLoader) -> MediaConfig:
    """Load a configuration whose root holds ``body``.

    Args:
        body (str): XML placed inside ``<properties>``.
        loader (ServiceLoader): Loader resolving the ``class`` names.

    Returns:
        MediaConfig: The assembled configuration.
    """
    return load_config_text(properties(body), loader, source="<test>")


def load_failure(body: str, loader: ServiceLoader) -> ConfigurationError:
    """Load ``body`` and return the `ConfigurationError` it must raise."""
    with pytest.raises(ConfigurationError) as excinfo:
        load_body(body, loader)
    return excinfo.value
