# topmark:header:start
#
#   project      : MediaConf
#   file         : translator.py
#   file_relpath : src/mediaconf/config/translator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Translator assembly.

Translators are not composed. Every ``<translator>`` element directly below the root is
resolved and built with no arguments (so an unknown name still fails the load); the first
one in document order is used and the others are ignored. Nested ones are not read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mediaconf.config.document import children, class_name
from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import TAG_TRANSLATOR
from mediaconf.errors import ConfigurationError, ServiceUnavailableError, UnknownServiceError
from mediaconf.services.loader import ServiceFamily
from mediaconf.translate.base import DefaultTranslator

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from mediaconf.services.loader import ServiceLoader
    from mediaconf.translate.base import Translator

logger: MediaconfLogger = get_logger(__name__)


def load_translator(root: ET.Element, loader: ServiceLoader) -> Translator:
    """Build the configuration's translator.

    Args:
        root (ET.Element): Configuration root element.
        loader (ServiceLoader): Resolves ``class`` names.

    Returns:
        Translator: The first declared translator, or a `DefaultTranslator`.

    Raises:
        ConfigurationError: If any declared translator cannot be resolved or built.
    """
    translators: list[Translator] = []
    for element in children(root, TAG_TRANSLATOR):
        name: str = class_name(element)
        try:
            cls: type[Any] = loader.get_service_class(ServiceFamily.TRANSLATOR, name)
        except UnknownServiceError as exc:
            raise ConfigurationError(f"Unable to find a translator class: {name}") from exc
        except ServiceUnavailableError as exc:
            raise ConfigurationError(f"Unable to access a translator class: {name}") from exc
        try:
            translators.append(cls())
        except Exception as exc:
            raise ConfigurationError(f"Unable to create a translator class: {name}") from exc

    if not translators:
        logger.debug("No <translator> declared; using the default")
        return DefaultTranslator(loader)
    if len(translators) > 1:
        logger.debug(
            "Using %r; ignoring %d further translator(s): %s",
            translators[0],
            len(translators) - 1,
            ", ".join(repr(t) for t in translators[1:]),
        )
    return translators[0]
