# topmark:header:start
#
#   project      : MediaConf
#   file         : builtins.py
#   file_relpath : src/mediaconf/parse/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in leaf parsers."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, BinaryIO, Final

from mediaconf.constants import CONTENT_TYPE_KEY
from mediaconf.errors import ParseFailure
from mediaconf.mime.types import MediaType
from mediaconf.parse.base import ParseContext, ParsedContent, Parser

if TYPE_CHECKING:
    from mediaconf.parse.base import Metadata

DEFAULT_ENCODING: Final[str] = "utf-8"


class EmptyParser(Parser):
    """Parser that supports no types and extracts nothing; used as the dispatch fallback."""

    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        return frozenset()

    def parse(
        self,
        stream: BinaryIO,
        metadata: Metadata,
        context: ParseContext | None = None,
    ) -> ParsedContent:
        return ParsedContent(text="", metadata=dict(metadata))


class TextParser(Parser):
    """Decode ``text/plain`` documents (UTF-8 unless a ``charset`` parameter says otherwise)."""

    SUPPORTED: Final[frozenset[MediaType]] = frozenset({MediaType.TEXT_PLAIN})

    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        return self.SUPPORTED

    def parse(
        self,
        stream: BinaryIO,
        metadata: Metadata,
        context: ParseContext | None = None,
    ) -> ParsedContent:
        declared: MediaType | None = MediaType.try_parse(metadata.get(CONTENT_TYPE_KEY))
        encoding: str = (declared.parameter("charset") if declared else None) or DEFAULT_ENCODING
        try:
            text: str = stream.read().decode(encoding, errors="replace")
        except LookupError as exc:
            raise ParseFailure(f"Unknown charset: {encoding}") from exc
        metadata.setdefault(CONTENT_TYPE_KEY, str(MediaType.TEXT_PLAIN))
        return ParsedContent(text=text, metadata=dict(metadata))


class XmlParser(Parser):
    """Extract the character data of every element of an XML document."""

    SUPPORTED: Final[frozenset[MediaType]] = frozenset({MediaType.APPLICATION_XML})

    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        return self.SUPPORTED

    def parse(
        self,
        stream: BinaryIO,
        metadata: Metadata,
        context: ParseContext | None = None,
    ) -> ParsedContent:
        try:
            root: ET.Element = ET.parse(stream).getroot()
        except ET.ParseError as exc:
            raise ParseFailure(f"Malformed XML: {exc}") from exc
        chunks: list[str] = [t.strip() for t in root.itertext() if t.strip()]
        metadata.setdefault(CONTENT_TYPE_KEY, str(MediaType.APPLICATION_XML))
        return ParsedContent(text="\n".join(chunks), metadata=dict(metadata))
