# topmark:header:start
#
#   project      : MediaConf
#   file         : base.py
#   file_relpath : src/mediaconf/parse/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Abstract base class for all parser implementations.

A parser advertises the media types it supports and extracts text (plus metadata) from
a byte stream of one of those types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, BinaryIO, Dict, TypeVar, cast

from mediaconf.services.shapes import Constructible

if TYPE_CHECKING:
    from mediaconf.mime.types import MediaType

V = TypeVar("V")

# Mutable document metadata (``resourceName``, ``Content-Type``, parser-specific keys).
Metadata = Dict[str, str]


class ParseContext:
    """Type-keyed bag of collaborators passed through nested parser calls.

    Example:
        ```python
        ctx = ParseContext()
        ctx.set(MediaTypeRegistry, registry)
        registry = ctx.get(MediaTypeRegistry)
        ```
    """

    def __init__(self) -> None:
        self._items: dict[type[Any], Any] = {}

    def set(self, key: type[V], value: V | None) -> None:
        """Store ``value`` under ``key`` (None removes it)."""
        if value is None:
            self._items.pop(key, None)
        else:
            self._items[key] = value

    def get(self, key: type[V], default: V | None = None) -> V | None:
        """Return the value stored under ``key``, or ``default``."""
        return cast("V | None", self._items.get(key, default))


@dataclass(frozen=True)
class ParsedContent:
    """Result of a parse.

    Attributes:
        text (str): Extracted plain text.
        metadata (dict[str, str]): Metadata after parsing (includes ``Content-Type``).
    """

    text: str
    metadata: dict[str, str] = field(default_factory=dict)


class Parser(Constructible, ABC):
    """Extracts structured content from a byte stream."""

    @abstractmethod
    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        """Return the media types this parser claims to handle."""
        ...

    @abstractmethod
    def parse(
        self,
        stream: BinaryIO,
        metadata: Metadata,
        context: ParseContext | None = None,
    ) -> ParsedContent:
        """Parse ``stream``.

        Args:
            stream (BinaryIO): Document bytes.
            metadata (Metadata): Known metadata; parsers may add keys.
            context (ParseContext | None): Collaborators for nested parsing.

        Returns:
            ParsedContent: Extracted text and resulting metadata.

        Raises:
            ParseFailure: If the document cannot be parsed.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
