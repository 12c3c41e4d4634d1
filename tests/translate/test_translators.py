# topmark:header:start
#
#   project      : MediaConf
#   file         : test_translators.py
#   file_relpath : tests/translate/test_translators.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the translator implementations."""

from __future__ import annotations

import pytest

from mediaconf.errors import TranslatorUnavailableError
from mediaconf.services.loader import ServiceFamily, ServiceLoader
from mediaconf.translate.base import DefaultTranslator, EmptyTranslator
from tests.sample_services import OfflineTranslator, ReverseTranslator, UpperTranslator


def test_empty_translator_is_the_identity() -> None:
    translator = EmptyTranslator()
    assert translator.is_available()
    assert translator.translate("bonjour", "en", "fr") == "bonjour"


def test_default_translator_without_candidates() -> None:
    translator = DefaultTranslator(ServiceLoader())
    assert translator.translators == ()
    assert not translator.is_available()
    with pytest.raises(TranslatorUnavailableError, match="No translator is currently available"):
        translator.translate("hello", "fr")


def test_default_translator_uses_the_first_available_candidate() -> None:
    loader = ServiceLoader()
    loader.register(ServiceFamily.TRANSLATOR, "offline", OfflineTranslator, auto=True)
    loader.register(ServiceFamily.TRANSLATOR, "reverse", ReverseTranslator, auto=True)
    loader.register(ServiceFamily.TRANSLATOR, "upper", UpperTranslator, auto=True)

    translator = DefaultTranslator(loader)
    assert [type(t) for t in translator.translators] == [
        OfflineTranslator,
        ReverseTranslator,
        UpperTranslator,
    ]
    assert isinstance(translator.get_translator(), ReverseTranslator)
    assert translator.translate("abc", "fr") == "cba"


def test_builtin_manifest_has_no_automatic_translator() -> None:
    assert DefaultTranslator().translators == ()
