# topmark:header:start
#
#   project      : MediaConf
#   file         : test_loader_properties.py
#   file_relpath : tests/config/test_loader_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the composite loader.

For generated documents built from the sample leaf parsers, the loaded parser tree must
keep document order, drop exactly the excluded classes and advertise the filtered type
sets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from hypothesis import HealthCheck, given, settings

from mediaconf.mime.types import MediaType
from mediaconf.parse.composite import CompositeParser
from tests.config.conftest import load_body
from tests.strategies_mediaconf import (
    LEAF_CLASSES,
    composite_element,
    parser_element,
    s_exclusions,
    s_leaf_names,
    s_type_subset,
)

if TYPE_CHECKING:
    from mediaconf.services.loader import ServiceLoader

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

# The service loader fixture is only read by these tests.
PROPERTY_SETTINGS = settings(
    suppress_health_check=[HealthCheck.function_scoped_fixture, HealthCheck.too_slow],
    deadline=None,
    max_examples=40,
)


@PROPERTY_SETTINGS
@given(names=s_leaf_names(min_size=1))
def test_leaves_are_composed_in_document_order(
    service_loader: ServiceLoader, names: list[str]
) -> None:
    body = "<parsers>" + "".join(parser_element(n) for n in names) + "</parsers>"
    parser = load_body(body, service_loader).parser
    assert type(parser) is CompositeParser
    assert isinstance(parser, CompositeParser)
    assert [type(p).__name__ for p in parser.parsers] == names


@PROPERTY_SETTINGS
@given(names=s_leaf_names(), excluded=s_exclusions())
def test_exclusion_drops_exactly_the_excluded_classes(
    service_loader: ServiceLoader, names: list[str], excluded: frozenset[str]
) -> None:
    element: str = composite_element("CompositeXYZ", names, sorted(excluded))
    parser = load_body(f"<parsers>{element}</parsers>", service_loader).parser
    assert isinstance(parser, CompositeParser)
    assert [type(p).__name__ for p in parser.parsers] == [n for n in names if n not in excluded]
    assert parser.excluded == frozenset(LEAF_CLASSES[n] for n in excluded)


@PROPERTY_SETTINGS
@given(
    name=s_leaf_names(min_size=1, max_size=1),
    included=s_type_subset(),
    removed=s_type_subset(),
)
def test_type_filters_compose(
    service_loader: ServiceLoader,
    name: list[str],
    included: frozenset[str],
    removed: frozenset[str],
) -> None:
    leaf_name: str = name[0]
    element: str = parser_element(leaf_name, sorted(included), sorted(removed))
    parser = load_body(f"<parsers>{element}</parsers>", service_loader).parser

    native: frozenset[MediaType] = LEAF_CLASSES[leaf_name]().get_supported_types()
    base: frozenset[MediaType] = (
        frozenset(MediaType.parse(t) for t in included) if included else native
    )
    expected: frozenset[MediaType] = base - frozenset(MediaType.parse(t) for t in removed)
    assert parser.get_supported_types() == expected


@PROPERTY_SETTINGS
@given(names=s_leaf_names(min_size=1))
def test_dispatch_goes_to_the_last_claiming_child(
    service_loader: ServiceLoader, names: list[str]
) -> None:
    body = "<parsers>" + "".join(parser_element(n) for n in names) + "</parsers>"
    parser = load_body(body, service_loader).parser
    assert isinstance(parser, CompositeParser)
    for media_type, chosen in parser.get_parsers().items():
        claimants = [p for p in parser.parsers if media_type in p.get_supported_types()]
        assert chosen is claimants[-1]
