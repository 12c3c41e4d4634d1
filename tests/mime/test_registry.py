# topmark:header:start
#
#   project      : MediaConf
#   file         : test_registry.py
#   file_relpath : tests/mime/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the frozen media type registry and its builder."""

from __future__ import annotations

import pytest

from mediaconf.mime.registry import MediaTypeRegistry, MutableMediaTypeRegistry
from mediaconf.mime.types import MediaType
from tests.conftest import parametrize

DOCX = MediaType.application("vnd.openxmlformats-officedocument.wordprocessingml.document")


def _registry() -> MediaTypeRegistry:
    draft = MutableMediaTypeRegistry()
    draft.add_types([MediaType.TEXT_PLAIN, MediaType.APPLICATION_XML, MediaType.APPLICATION_ZIP])
    draft.add_alias(MediaType.APPLICATION_XML, MediaType.text("xml"))
    draft.add_supertype(DOCX, MediaType.APPLICATION_ZIP)
    return draft.freeze()


def test_normalize_resolves_aliases_and_keeps_parameters() -> None:
    registry = _registry()
    assert registry.normalize(MediaType.text("xml")) == MediaType.APPLICATION_XML
    with_charset = registry.normalize(MediaType.parse("text/xml; charset=utf-8"))
    assert with_charset.base_type == MediaType.APPLICATION_XML
    assert with_charset.parameter("charset") == "utf-8"
    assert registry.normalize(MediaType.text("csv")) == MediaType.text("csv")


def test_aliases_of_and_contains() -> None:
    registry = _registry()
    assert registry.aliases_of(MediaType.APPLICATION_XML) == {MediaType.text("xml")}
    assert MediaType.text("xml") in registry
    assert DOCX in registry
    assert MediaType.text("csv") not in registry
    assert "text/plain" not in registry
    assert len(registry) == 4


@parametrize(
    ("child", "parent"),
    [
        ("text/plain; charset=utf-8", "text/plain"),
        ("image/svg+xml", "application/xml"),
        ("application/epub+zip", "application/zip"),
        ("text/csv", "text/plain"),
        ("application/x-empty-thing", "application/x-empty"),
        ("image/png", "application/octet-stream"),
    ],
)
def test_supertype_fallback_chain(child: str, parent: str) -> None:
    registry = MediaTypeRegistry.empty()
    assert registry.get_supertype(MediaType.parse(child)) == MediaType.parse(parent)


def test_octet_stream_is_the_root() -> None:
    assert MediaTypeRegistry.empty().get_supertype(MediaType.OCTET_STREAM) is None


def test_explicit_supertype_wins() -> None:
    registry = _registry()
    assert registry.get_supertype(DOCX) == MediaType.APPLICATION_ZIP
    assert registry.is_specialization_of(DOCX, MediaType.APPLICATION_ZIP)
    assert registry.is_specialization_of(DOCX, MediaType.OCTET_STREAM)
    assert not registry.is_specialization_of(MediaType.APPLICATION_ZIP, DOCX)


def test_is_instance_of_is_reflexive() -> None:
    registry = _registry()
    assert registry.is_instance_of(MediaType.TEXT_PLAIN, MediaType.TEXT_PLAIN)
    assert not registry.is_specialization_of(MediaType.TEXT_PLAIN, MediaType.TEXT_PLAIN)


def test_conflicting_alias_is_rejected() -> None:
    draft = MutableMediaTypeRegistry()
    draft.add_alias(MediaType.APPLICATION_XML, MediaType.text("xml"))
    with pytest.raises(ValueError, match="already registered"):
        draft.add_alias(MediaType.TEXT_PLAIN, MediaType.text("xml"))


def test_freeze_and_thaw_are_independent() -> None:
    draft = MutableMediaTypeRegistry()
    draft.add_type(MediaType.TEXT_PLAIN)
    frozen = draft.freeze()
    draft.add_type(MediaType.APPLICATION_XML)
    assert MediaType.APPLICATION_XML not in frozen

    thawed = frozen.thaw()
    thawed.add_type(MediaType.APPLICATION_ZIP)
    assert MediaType.APPLICATION_ZIP not in frozen
    assert MediaType.APPLICATION_ZIP in thawed.freeze()
