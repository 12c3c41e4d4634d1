# topmark:header:start
#
#   project      : MediaConf
#   file         : document.py
#   file_relpath : src/mediaconf/config/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for reading MediaConf configuration documents.

Every document source (file, text, stream, URL) is reduced to a parsed root
[`xml.etree.ElementTree.Element`][xml.etree.ElementTree.Element]; everything past this
module only ever sees elements.

Notes:
    ElementTree has no ``getElementsByTagName``;
    [`descendants`][mediaconf.config.document.descendants] provides the equivalent
    (document order, the element itself excluded).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import IO, TYPE_CHECKING
from urllib.error import URLError
from urllib.request import urlopen

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import ATTR_CLASS
from mediaconf.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger: MediaconfLogger = get_logger(__name__)


def parse_text(text: str, *, source: str = "<string>") -> ET.Element:
    """Parse configuration text and return its root element.

    Raises:
        ConfigurationError: If the text is not well-formed XML.
    """
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise ConfigurationError(f"Configuration document has syntax errors: {source}") from exc


def parse_stream(stream: IO[bytes], *, source: str = "<stream>") -> ET.Element:
    """Parse a binary stream holding a configuration document."""
    try:
        return ET.parse(stream).getroot()
    except ET.ParseError as exc:
        raise ConfigurationError(f"Configuration document has syntax errors: {source}") from exc


def parse_file(path: Path) -> ET.Element:
    """Parse the configuration document at ``path``.

    Raises:
        ConfigurationError: If the file cannot be read or is not well-formed XML.
    """
    logger.debug("Reading configuration file %s", path)
    try:
        with path.open("rb") as fh:
            return parse_stream(fh, source=str(path))
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration file: {path}") from exc


def parse_url(url: str) -> ET.Element:
    """Fetch and parse the configuration document at ``url``."""
    logger.debug("Fetching configuration from %s", url)
    try:
        with urlopen(url) as response:  # noqa: S310
            return parse_stream(response, source=url)
    except (URLError, OSError, ValueError) as exc:
        raise ConfigurationError(f"Unable to read configuration URL: {url}") from exc


def descendants(element: ET.Element, tag: str) -> list[ET.Element]:
    """Return every element named ``tag`` below ``element``, in document order."""
    return [e for e in element.iter(tag) if e is not element]


def children(element: ET.Element, tag: str) -> list[ET.Element]:
    """Return the direct children of ``element`` named ``tag``."""
    return element.findall(tag)


def first_child(element: ET.Element, tag: str) -> ET.Element | None:
    """Return the first direct child named ``tag``, if any."""
    return element.find(tag)


def text_of(element: ET.Element) -> str:
    """Return the concatenated, stripped text content of ``element``."""
    return "".join(element.itertext()).strip()


def iter_texts(element: ET.Element, tag: str) -> Iterator[str]:
    """Yield the text of every direct child named ``tag``."""
    for child in children(element, tag):
        yield text_of(child)


def class_name(element: ET.Element) -> str:
    """Return the ``class`` attribute of ``element``.

    Raises:
        ConfigurationError: If the attribute is missing or blank.
    """
    value: str = (element.get(ATTR_CLASS) or "").strip()
    if not value:
        raise ConfigurationError(f"Missing class attribute in <{element.tag}> element")
    return value
