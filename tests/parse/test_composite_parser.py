# topmark:header:start
#
#   project      : MediaConf
#   file         : test_composite_parser.py
#   file_relpath : tests/parse/test_composite_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for composite parser dispatch and exclusion."""

from __future__ import annotations

import io

from mediaconf.constants import CONTENT_TYPE_KEY
from mediaconf.mime.registry import MutableMediaTypeRegistry
from mediaconf.mime.types import MediaType
from mediaconf.parse.builtins import EmptyParser, TextParser, XmlParser
from mediaconf.parse.composite import CompositeParser, is_parser_excluded
from mediaconf.parse.decorator import ParserDecorator
from tests.sample_services import TYPE_A, TYPE_B, TYPE_C, LeafA, LeafAB, LeafB, LeafC


def _parse(parser: CompositeParser, content_type: str) -> str:
    return parser.parse(io.BytesIO(b""), {CONTENT_TYPE_KEY: content_type}).text


def test_later_child_wins_for_shared_types() -> None:
    composite = CompositeParser(None, [LeafAB(), LeafB()])
    table = composite.get_parsers()
    assert type(table[TYPE_A]) is LeafAB
    assert type(table[TYPE_B]) is LeafB
    assert composite.get_supported_types() == frozenset({TYPE_A, TYPE_B})


def test_dispatch_by_content_type() -> None:
    composite = CompositeParser(None, [LeafA(), LeafB()])
    assert _parse(composite, "application/x-b") == "LeafB"
    assert _parse(composite, "application/x-a; charset=utf-8") == "LeafA"


def test_unclaimed_types_go_to_the_fallback() -> None:
    composite = CompositeParser(None, [LeafA()])
    assert isinstance(composite.fallback, EmptyParser)
    assert _parse(composite, "application/x-c") == ""
    assert composite.parse(io.BytesIO(b"x"), {}).text == ""

    custom = CompositeParser(None, [LeafA()], fallback=LeafC())
    assert _parse(custom, "image/png") == "LeafC"


def test_supertype_walk() -> None:
    composite = CompositeParser(None, [TextParser(), XmlParser()])
    assert isinstance(composite.find_parser(MediaType.text("csv")), TextParser)
    assert isinstance(composite.find_parser(MediaType.parse("image/svg+xml")), XmlParser)
    assert composite.find_parser(MediaType.parse("image/png")) is composite.fallback
    assert composite.find_parser(None) is composite.fallback


def test_aliases_are_normalized() -> None:
    draft = MutableMediaTypeRegistry()
    draft.add_alias(TYPE_A, MediaType.application("x-old-a"))
    composite = CompositeParser(draft.freeze(), [LeafA()])
    assert _parse(composite, "application/x-old-a") == "LeafA"


def test_exclusion_drops_subclasses_and_decorated_instances() -> None:
    restricted = ParserDecorator.with_types(LeafA(), [TYPE_C])
    composite = CompositeParser(None, [restricted, LeafB(), LeafAB()], [LeafA])
    assert [type(p) for p in composite.parsers] == [LeafB, LeafAB]
    assert composite.excluded == frozenset({LeafA})


def test_is_parser_excluded() -> None:
    wrapped = ParserDecorator(ParserDecorator(LeafB()))
    assert is_parser_excluded(wrapped, [LeafB])
    assert is_parser_excluded(wrapped, [ParserDecorator])
    assert not is_parser_excluded(wrapped, [LeafA])
    assert not is_parser_excluded(wrapped, [])


def test_from_children_matches_the_constructor() -> None:
    composite = CompositeParser.from_children(
        MutableMediaTypeRegistry().freeze(), [LeafA(), LeafB()], [LeafB]
    )
    assert [type(p) for p in composite.parsers] == [LeafA]
    assert repr(composite) == "CompositeParser([LeafA()])"
