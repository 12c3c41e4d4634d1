# topmark:header:start
#
#   project      : MediaConf
#   file         : default.py
#   file_relpath : src/mediaconf/parse/default.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default parser built from every auto-discovered parser."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Iterable

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.mime.repository import get_builtin_repository
from mediaconf.parse.composite import CompositeParser
from mediaconf.services.loader import ServiceFamily, ServiceLoader
from mediaconf.services.shapes import ConstructionShape

if TYPE_CHECKING:
    from mediaconf.mime.registry import MediaTypeRegistry
    from mediaconf.parse.base import Parser

logger: MediaconfLogger = get_logger(__name__)


class DefaultParser(CompositeParser):
    """Composite of all ``auto`` parsers registered in a service loader.

    Args:
        registry (MediaTypeRegistry | None): Registry for dispatch; the built-in
            repository's registry when None.
        loader (ServiceLoader | None): Source of parsers; the packaged manifest when None.
        excluded (Iterable[type[Parser]] | None): Parser classes to leave out.
    """

    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset(
        {ConstructionShape.FROM_LOADER}
    )

    def __init__(
        self,
        registry: MediaTypeRegistry | None = None,
        loader: ServiceLoader | None = None,
        excluded: Iterable[type[Parser]] | None = None,
    ) -> None:
        if registry is None:
            registry = get_builtin_repository().registry
        skip: tuple[type[Parser], ...] = tuple(excluded or ())
        source: ServiceLoader = loader if loader is not None else ServiceLoader.builtin()
        parsers: list[Parser] = source.load_services(ServiceFamily.PARSER, skip)
        logger.debug(
            "DefaultParser assembled %d parser(s): %s",
            len(parsers),
            ", ".join(p.__class__.__name__ for p in parsers),
        )
        super().__init__(registry, parsers, skip)
        self.loader: ServiceLoader = source

    @classmethod
    def from_loader(
        cls,
        registry: MediaTypeRegistry,
        loader: ServiceLoader,
        excluded: Iterable[type[Parser]] | None = None,
    ) -> DefaultParser:
        """Build from a registry, a service loader and exclusions."""
        return cls(registry, loader, excluded)
