# topmark:header:start
#
#   project      : MediaConf
#   file         : test_media_config.py
#   file_relpath : tests/config/test_media_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the resolved configuration model and its descriptions."""

from __future__ import annotations

import dataclasses
import json
from typing import TYPE_CHECKING

import pytest

from mediaconf.config.describe import describe_config, qualified_name, render_tree
from mediaconf.mime.types import MediaType
from mediaconf.parse.auto import AutoDetectParser
from mediaconf.parse.builtins import TextParser, XmlParser
from mediaconf.parse.decorator import ParserDecorator
from tests.config.conftest import load_body
from tests.sample_services import TYPE_A, TYPE_B, LeafA, LeafAB

if TYPE_CHECKING:
    from mediaconf.services.loader import ServiceLoader


def test_config_is_immutable(service_loader: ServiceLoader) -> None:
    config = load_body("", service_loader)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.parser = TextParser()  # type: ignore[misc]


def test_parser_for_composite(service_loader: ServiceLoader) -> None:
    config = load_body("", service_loader)
    assert isinstance(config.parser_for(MediaType.text("xml")), XmlParser)
    assert isinstance(config.parser_for(MediaType.text("csv")), TextParser)
    assert config.parser_for(MediaType.parse("image/png")) is None


def test_parser_for_decorated_top_level(service_loader: ServiceLoader) -> None:
    config = load_body(
        '<parsers><parser class="LeafAB"><mime-exclude>application/x-b</mime-exclude>'
        "</parser></parsers>",
        service_loader,
    )
    assert isinstance(config.parser, ParserDecorator)
    assert config.parser_for(TYPE_A) is config.parser
    assert config.parser_for(TYPE_B) is None


def test_auto_detect_parser_is_bound_to_the_config(service_loader: ServiceLoader) -> None:
    config = load_body("", service_loader)
    auto = config.auto_detect_parser()
    assert isinstance(auto, AutoDetectParser)
    assert auto.detector is config.detector
    assert auto.parsers == (config.parser,)


def test_describe_config_is_json_serializable(service_loader: ServiceLoader) -> None:
    config = load_body(
        '<parsers><parser class="LeafA"/>'
        '<parser class="LeafAB"><mime>application/x-b</mime></parser></parsers>',
        service_loader,
    )
    payload = describe_config(config)
    assert json.loads(json.dumps(payload)) == payload
    assert payload["source"] == "<test>"
    assert payload["mime_repository"]["types"] == len(config.media_type_registry)

    parser = payload["parser"]
    assert parser["class"] == "mediaconf.parse.composite.CompositeParser"
    children = parser["children"]
    assert children[0] == {"class": qualified_name(LeafA()), "types": ["application/x-a"]}
    assert children[1]["wrapped"]["class"] == qualified_name(LeafAB())
    assert children[1]["types"] == ["application/x-b"]


def test_render_tree_indents_children(service_loader: ServiceLoader) -> None:
    config = load_body('<parsers><parser class="LeafA"/></parsers>', service_loader)
    lines = render_tree(describe_config(config)["parser"])
    assert lines == [
        "- mediaconf.parse.composite.CompositeParser",
        "  - tests.sample_services.LeafA [application/x-a]",
    ]
