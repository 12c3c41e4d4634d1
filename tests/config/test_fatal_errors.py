# topmark:header:start
#
#   project      : MediaConf
#   file         : test_fatal_errors.py
#   file_relpath : tests/config/test_fatal_errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Every configuration problem aborts the whole load with a `ConfigurationError`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mediaconf.config.assembler import load_config_text
from mediaconf.errors import (
    ConfigurationError,
    MediaTypeError,
    ServiceUnavailableError,
    UnknownServiceError,
)
from tests.config.conftest import load_failure
from tests.conftest import parametrize

if TYPE_CHECKING:
    from mediaconf.services.loader import ServiceLoader


@parametrize(
    ("body", "message"),
    [
        (
            "<parsers/><parsers/>",
            "Properties may not contain multiple parsers entries",
        ),
        (
            "<detectors/><other><detectors/></other>",
            "Properties may not contain multiple detectors entries",
        ),
        (
            '<parsers><parser class="AutoDetectParser"/></parsers>',
            "AutoDetectParser not supported in a <parser> configuration element: "
            "AutoDetectParser",
        ),
        (
            '<parsers><parser class="LeafA"><parser class="AutoDetectParser"/></parser></parsers>',
            "AutoDetectParser not supported in a <parser> configuration element: "
            "AutoDetectParser",
        ),
        (
            '<parsers><parser class="CompositeParser">'
            '<parser class="LeafA"/><parser class="AutoDetectParser"/></parser></parsers>',
            "AutoDetectParser not supported in a <parser> configuration element: "
            "AutoDetectParser",
        ),
        (
            '<parsers><parser class="LeafA"><parser class="NoSuchParser"/></parser></parsers>',
            "Unable to find a parser class: NoSuchParser",
        ),
        (
            '<parsers><parser class="LeafA"><mime>not a type</mime></parser></parsers>',
            "Invalid media type name: not a type",
        ),
        (
            '<detectors><detector class="NoSuchDetector"/></detectors>',
            "Unable to find a detector class: NoSuchDetector",
        ),
        (
            '<parsers><parser class="com.example.Broken"/></parsers>',
            "Unable to access a parser class: com.example.Broken",
        ),
        (
            '<parsers><parser class="ExplodingParser"/></parsers>',
            "Unable to create a parser class: ExplodingParser",
        ),
        (
            "<parsers><parser/></parsers>",
            "Missing class attribute in <parser> element",
        ),
        (
            '<parsers><parser class="CompositeParser">'
            '<parser-exclude class="Nowhere"/></parser></parsers>',
            "Unable to find a parser class: Nowhere",
        ),
        (
            '<translator class="NoSuchTranslator"/>',
            "Unable to find a translator class: NoSuchTranslator",
        ),
        (
            "<mimeTypeRepository/>",
            "Missing resource attribute in <mimeTypeRepository> element",
        ),
        (
            '<mimeTypeRepository resource="no-such-types.toml"/>',
            "Media type repository not found: no-such-types.toml",
        ),
    ],
)
def test_fatal_configuration_errors(
    service_loader: ServiceLoader, body: str, message: str
) -> None:
    error = load_failure(body, service_loader)
    assert str(error) == message


def test_nested_failure_is_reported_unchanged(service_loader: ServiceLoader) -> None:
    error = load_failure(
        '<parsers><parser class="CompositeParser">'
        '<parser class="LeafA"/><parser class="ExplodingParser"/>'
        "</parser></parsers>",
        service_loader,
    )
    assert str(error) == "Unable to create a parser class: ExplodingParser"


@parametrize(
    ("body", "cause_type"),
    [
        ('<parsers><parser class="ExplodingParser"/></parsers>', RuntimeError),
        ('<parsers><parser class="Unknown"/></parsers>', UnknownServiceError),
        ('<parsers><parser class="com.example.Broken"/></parsers>', ServiceUnavailableError),
        ('<parsers><parser class="LeafA"><mime>x</mime></parser></parsers>', MediaTypeError),
    ],
)
def test_underlying_cause_is_chained(
    service_loader: ServiceLoader, body: str, cause_type: type[BaseException]
) -> None:
    error = load_failure(body, service_loader)
    assert isinstance(error.__cause__, cause_type)


def test_cause_chain_lists_every_level(service_loader: ServiceLoader) -> None:
    error = load_failure('<parsers><parser class="ExplodingParser"/></parsers>', service_loader)
    assert error.cause_chain() == [
        "Unable to create a parser class: ExplodingParser",
        "RuntimeError: boom",
    ]


def test_syntax_errors(service_loader: ServiceLoader) -> None:
    with pytest.raises(ConfigurationError, match="has syntax errors: broken.xml"):
        load_config_text("<properties><parsers>", service_loader, source="broken.xml")


def test_wrong_family_class_is_not_accessible(service_loader: ServiceLoader) -> None:
    error = load_failure('<detectors><detector class="LeafA"/></detectors>', service_loader)
    assert str(error) == "Unable to find a detector class: LeafA"
