# topmark:header:start
#
#   project      : MediaConf
#   file         : decorator.py
#   file_relpath : src/mediaconf/parse/decorator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parser decorators.

A [`ParserDecorator`][mediaconf.parse.decorator.ParserDecorator] wraps exactly one inner
parser and forwards every call to it. Subclasses (and the two factories
[`with_types`][mediaconf.parse.decorator.ParserDecorator.with_types] and
[`without_types`][mediaconf.parse.decorator.ParserDecorator.without_types]) change the
set of advertised types without altering how documents are parsed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, ClassVar, Iterable

from mediaconf.parse.base import ParseContext, ParsedContent, Parser
from mediaconf.services.shapes import ConstructionShape

if TYPE_CHECKING:
    from mediaconf.mime.types import MediaType
    from mediaconf.parse.base import Metadata


class ParserDecorator(Parser):
    """Forward every call to a single wrapped parser.

    Args:
        parser (Parser): The wrapped parser.
    """

    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset(
        {ConstructionShape.WRAPPING}
    )

    def __init__(self, parser: Parser) -> None:
        self._parser: Parser = parser

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._parser!r})"

    @classmethod
    def wrapping(cls, inner: Parser) -> ParserDecorator:
        """Build a decorator around ``inner``."""
        return cls(inner)

    @property
    def wrapped_parser(self) -> Parser:
        """The decorated parser."""
        return self._parser

    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        return self._parser.get_supported_types(context)

    def parse(
        self,
        stream: BinaryIO,
        metadata: Metadata,
        context: ParseContext | None = None,
    ) -> ParsedContent:
        return self._parser.parse(stream, metadata, context)

    @staticmethod
    def with_types(parser: Parser, types: Iterable[MediaType]) -> ParserDecorator:
        """Return a decorator that advertises exactly ``types``.

        Args:
            parser (Parser): Parser to wrap.
            types (Iterable[MediaType]): Types to advertise instead of the inner set.

        Returns:
            ParserDecorator: The restricting decorator.
        """
        return _TypeRestrictingDecorator(parser, frozenset(types))

    @staticmethod
    def without_types(parser: Parser, types: Iterable[MediaType]) -> ParserDecorator:
        """Return a decorator that advertises the inner types minus ``types``."""
        return _TypeExcludingDecorator(parser, frozenset(types))


class _TypeRestrictingDecorator(ParserDecorator):
    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset()

    def __init__(self, parser: Parser, types: frozenset[MediaType]) -> None:
        super().__init__(parser)
        self.types: frozenset[MediaType] = types

    def __repr__(self) -> str:
        listed: str = ", ".join(sorted(str(t) for t in self.types))
        return f"ParserDecorator.with_types({self._parser!r}, [{listed}])"

    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        return self.types


class _TypeExcludingDecorator(ParserDecorator):
    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset()

    def __init__(self, parser: Parser, types: frozenset[MediaType]) -> None:
        super().__init__(parser)
        self.types: frozenset[MediaType] = types

    def __repr__(self) -> str:
        listed: str = ", ".join(sorted(str(t) for t in self.types))
        return f"ParserDecorator.without_types({self._parser!r}, [{listed}])"

    def get_supported_types(self, context: ParseContext | None = None) -> frozenset[MediaType]:
        return self._parser.get_supported_types(context) - self.types


def innermost_parser(parser: Parser) -> Parser:
    """Unwrap nested decorators and return the parser doing the actual work."""
    current: Parser = parser
    while isinstance(current, ParserDecorator):
        current = current.wrapped_parser
    return current
