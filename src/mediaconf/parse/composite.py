# topmark:header:start
#
#   project      : MediaConf
#   file         : composite.py
#   file_relpath : src/mediaconf/parse/composite.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Composite parser that dispatches a document to the child claiming its type.

The dispatch table is built by walking the children in order and mapping every
advertised (normalized) type to the child advertising it, so a later child overrides an
earlier one for the same type. At parse time the declared ``Content-Type`` is looked up,
walking up the registry's supertype chain until a match is found; documents of unknown
type go to the fallback parser.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, BinaryIO, ClassVar, Iterable, Mapping, Sequence

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import CONTENT_TYPE_KEY
from mediaconf.mime.registry import MediaTypeRegistry
from mediaconf.mime.types import MediaType
from mediaconf.parse.base import ParseContext, ParsedContent, Parser
from mediaconf.parse.builtins import EmptyParser
from mediaconf.parse.decorator import innermost_parser
from mediaconf.services.shapes import ConstructionShape

if TYPE_CHECKING:
    from mediaconf.parse.base import Metadata

logger: MediaconfLogger = get_logger(__name__)


def is_parser_excluded(parser: Parser, excluded: Sequence[type[Any]]) -> bool:
    """Return True if ``parser`` (or the parser it decorates) is of an excluded class."""
    if not excluded:
        return False
    classes: tuple[type[Any], ...] = tuple(excluded)
    return isinstance(parser, classes) or isinstance(innermost_parser(parser), classes)


class CompositeParser(Parser):
    """Parser that delegates to one of several child parsers based on media type.

    Args:
        registry (MediaTypeRegistry | None): Registry used to normalize types and walk
            supertypes; an empty registry (structural rules only) when None.
        parsers (Sequence[Parser]): Child parsers in priority order (later wins).
        excluded (Iterable[type[Parser]] | None): Classes whose instances are dropped
            from ``parsers``.
        fallback (Parser | None): Parser used when no child claims a type.
    """

    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset(
        {
            ConstructionShape.FROM_CHILDREN_EXCLUDING,
            ConstructionShape.FROM_CHILDREN,
        }
    )

    def __init__(
        self,
        registry: MediaTypeRegistry | None = None,
        parsers: Sequence[Parser] = (),
        excluded: Iterable[type[Parser]] | None = None,
        fallback: Parser | None = None,
    ) -> None:
        skip: tuple[type[Parser], ...] = tuple(excluded or ())
        self._registry: MediaTypeRegistry = (
            registry if registry is not None else MediaTypeRegistry.empty()
        )
        self._parsers: tuple[Parser, ...] = tuple(
            p for p in parsers if not is_parser_excluded(p, skip)
        )
        self._excluded: frozenset[type[Parser]] = frozenset(skip)
        self._fallback: Parser = fallback if fallback is not None else EmptyParser()
        if len(self._parsers) != len(parsers):
            logger.debug(
                "%s dropped %d excluded parser(s)",
                self.__class__.__name__,
                len(parsers) - len(self._parsers),
            )

    def __repr__(self) -> str:
        inner: str = ", ".join(repr(p) for p in self._parsers)
        return f"{self.__class__.__name__}([{inner}])"

    @classmethod
    def from_children(
        cls,
        registry: MediaTypeRegistry,
        children: Sequence[Parser],
        excluded: Iterable[type[Parser]] | None = None,
    ) -> CompositeParser:
        """Build from a registry, explicit children and optional exclusions."""
        return cls(registry, children, excluded)

    @property
    def registry(self) -> MediaTypeRegistry:
        """Registry used for normalization and supertype lookups."""
        return self._registry

    @property
    def parsers(self) -> tuple[Parser, ...]:
        """Child parsers (after exclusion) in declaration order."""
        return self._parsers

    @property
    def excluded(self) -> frozenset[type[Parser]]:
        """Classes excluded at construction time."""
        return self._excluded

    @property
    def fallback(self) -> Parser:
        """Parser used for documents of an unclaimed type."""
        return self._fallback

    def get_parsers(self, context: ParseContext | None = None) -> Mapping[MediaType, Parser]:
        """Return the dispatch table: normalized media type → child parser."""
        table: dict[MediaType, Parser] = {}
        for parser in self._parsers:
            for media_type in parser.get_supported_types(context):
                key: MediaType = self._registry.normalize(media_type)
                previous: Parser | None = table.get(key)
                if previous is not None and previous is not parser:
                    logger.trace("%s: %r overrides %r for %s", self, parser, previous, key)
                table[key] = parser
        return MappingProxyType(table)

    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        return frozenset(self.get_parsers(context))

    def find_parser(
        self,
        media_type: MediaType | None,
        context: ParseContext | None = None,
    ) -> Parser:
        """Return the child handling ``media_type`` or one of its supertypes.

        Args:
            media_type (MediaType | None): Type to look up; None selects the fallback.
            context (ParseContext | None): Passed to the children's type queries.

        Returns:
            Parser: The matching child, or the fallback parser.
        """
        table: Mapping[MediaType, Parser] = self.get_parsers(context)
        current: MediaType | None = media_type
        seen: set[MediaType] = set()
        while current is not None and current not in seen:
            seen.add(current)
            candidate: Parser | None = table.get(self._registry.normalize(current))
            if candidate is not None:
                return candidate
            current = self._registry.get_supertype(current)
        return self._fallback

    def parse(
        self,
        stream: BinaryIO,
        metadata: Metadata,
        context: ParseContext | None = None,
    ) -> ParsedContent:
        media_type: MediaType | None = MediaType.try_parse(metadata.get(CONTENT_TYPE_KEY))
        parser: Parser = self.find_parser(media_type, context)
        logger.debug("Dispatching %s to %r", media_type, parser)
        return parser.parse(stream, metadata, context)
