# topmark:header:start
#
#   project      : MediaConf
#   file         : base.py
#   file_relpath : src/mediaconf/translate/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Translator capability.

A configuration holds exactly one translator. Unlike detectors and parsers, translators
are never composed: the default translator simply delegates to the first available
translator found through the service loader.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.errors import TranslatorUnavailableError
from mediaconf.services.loader import ServiceFamily, ServiceLoader
from mediaconf.services.shapes import Constructible

logger: MediaconfLogger = get_logger(__name__)


class Translator(Constructible, ABC):
    """Translates text between natural languages."""

    @abstractmethod
    def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        """Translate ``text`` into ``target_language``.

        Args:
            text (str): Text to translate.
            target_language (str): Target language code (e.g. ``"fr"``).
            source_language (str | None): Source language code; detected when None.

        Returns:
            str: The translated text.

        Raises:
            TranslatorUnavailableError: If the translator cannot currently be used.
        """
        ...

    def is_available(self) -> bool:
        """Return True if this translator can be used right now."""
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class EmptyTranslator(Translator):
    """Identity translator: returns the input unchanged."""

    def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        return text


class DefaultTranslator(Translator):
    """Delegate to the first available ``auto`` translator of a service loader.

    Args:
        loader (ServiceLoader | None): Source of translators; the packaged manifest when
            None.
    """

    def __init__(self, loader: ServiceLoader | None = None) -> None:
        source: ServiceLoader = loader if loader is not None else ServiceLoader.builtin()
        self._translators: tuple[Translator, ...] = tuple(
            source.load_services(ServiceFamily.TRANSLATOR)
        )
        logger.debug("DefaultTranslator found %d candidate(s)", len(self._translators))

    def __repr__(self) -> str:
        inner: str = ", ".join(repr(t) for t in self._translators)
        return f"{self.__class__.__name__}([{inner}])"

    @property
    def translators(self) -> tuple[Translator, ...]:
        """Candidate translators in discovery order."""
        return self._translators

    def get_translator(self) -> Translator | None:
        """Return the first available candidate, or None."""
        for translator in self._translators:
            if translator.is_available():
                return translator
        return None

    def is_available(self) -> bool:
        return self.get_translator() is not None

    def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        translator: Translator | None = self.get_translator()
        if translator is None:
            raise TranslatorUnavailableError("No translator is currently available")
        return translator.translate(text, target_language, source_language)
