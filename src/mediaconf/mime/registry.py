# topmark:header:start
#
#   project      : MediaConf
#   file         : registry.py
#   file_relpath : src/mediaconf/mime/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of known media types and their relationships.

The registry follows MediaConf's mutable/immutable split:

- [`MutableMediaTypeRegistry`][mediaconf.mime.registry.MutableMediaTypeRegistry] is a
  builder used while a type repository is being read (``add_type``, ``add_alias``,
  ``add_supertype``).
- [`MediaTypeRegistry`][mediaconf.mime.registry.MediaTypeRegistry] is the frozen result
  handed to detectors and parsers. Its views are ``MappingProxyType`` / ``frozenset`` and
  must not be mutated.

Notes:
    * Aliases map to exactly one canonical type.
    * When no explicit supertype is recorded, ``get_supertype()`` falls back to the
      structural rules (``+xml`` → ``application/xml``, ``text/*`` → ``text/plain``,
      anything → ``application/octet-stream``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.mime.types import MediaType

if TYPE_CHECKING:
    from collections.abc import Iterable

logger: MediaconfLogger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class MediaTypeRegistry:
    """Immutable registry of media types, aliases and supertype links.

    Attributes:
        types (frozenset[MediaType]): Canonical registered types.
        aliases (Mapping[MediaType, MediaType]): Alias → canonical type.
        inheritance (Mapping[MediaType, MediaType]): Type → explicit supertype.
    """

    types: frozenset[MediaType] = frozenset()
    aliases: Mapping[MediaType, MediaType] = field(default_factory=lambda: MappingProxyType({}))
    inheritance: Mapping[MediaType, MediaType] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def empty(cls) -> MediaTypeRegistry:
        """Return a registry with no registered types (structural rules only)."""
        return cls()

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, MediaType):
            return False
        return self.normalize(item).base_type in self.types

    def __len__(self) -> int:
        return len(self.types)

    def __iter__(self) -> Iterator[MediaType]:
        return iter(sorted(self.types))

    def aliases_of(self, media_type: MediaType) -> frozenset[MediaType]:
        """Return all aliases registered for ``media_type``."""
        canonical: MediaType = self.normalize(media_type)
        return frozenset(a for a, t in self.aliases.items() if t == canonical)

    def normalize(self, media_type: MediaType) -> MediaType:
        """Resolve aliases, keeping any parameters.

        Args:
            media_type (MediaType): The type to normalize.

        Returns:
            MediaType: The canonical type (with the original parameters, if any).
        """
        canonical: MediaType | None = self.aliases.get(media_type.base_type)
        if canonical is None:
            return media_type
        if media_type.has_parameters:
            return canonical.with_parameters(media_type.parameters)
        return canonical

    def get_supertype(self, media_type: MediaType) -> MediaType | None:
        """Return the closest supertype of ``media_type``, or None at the root.

        The fallback chain is: drop parameters; explicit supertype; ``+xml`` suffix →
        ``application/xml``; ``+zip`` suffix → ``application/zip``; ``text/*`` →
        ``text/plain``; "empty" types → ``application/x-empty``; anything else except
        ``application/octet-stream`` → ``application/octet-stream``.
        """
        if media_type.has_parameters:
            return media_type.base_type
        explicit: MediaType | None = self.inheritance.get(media_type)
        if explicit is not None:
            return explicit
        if media_type.subtype.endswith("+xml") and media_type != MediaType.APPLICATION_XML:
            return MediaType.APPLICATION_XML
        if media_type.subtype.endswith("+zip") and media_type != MediaType.APPLICATION_ZIP:
            return MediaType.APPLICATION_ZIP
        if media_type.type == "text" and media_type != MediaType.TEXT_PLAIN:
            return MediaType.TEXT_PLAIN
        if "empty" in media_type.subtype and media_type != MediaType.EMPTY:
            return MediaType.EMPTY
        if media_type != MediaType.OCTET_STREAM:
            return MediaType.OCTET_STREAM
        return None

    def is_specialization_of(self, a: MediaType, b: MediaType) -> bool:
        """Return True if ``a`` is a strict descendant of ``b``."""
        supertype: MediaType | None = self.get_supertype(a)
        return supertype is not None and self.is_instance_of(supertype, b)

    def is_instance_of(self, a: MediaType, b: MediaType) -> bool:
        """Return True if ``a`` equals ``b`` or is a specialization of it."""
        seen: set[MediaType] = set()
        current: MediaType | None = a
        while current is not None and current not in seen:
            if current == b:
                return True
            seen.add(current)
            current = self.get_supertype(current)
        return False

    def thaw(self) -> MutableMediaTypeRegistry:
        """Return a mutable copy of this registry."""
        draft = MutableMediaTypeRegistry()
        draft.types.update(self.types)
        draft.aliases.update(self.aliases)
        draft.inheritance.update(self.inheritance)
        return draft


@dataclass
class MutableMediaTypeRegistry:
    """Mutable registry builder; call `freeze()` to obtain a `MediaTypeRegistry`."""

    types: set[MediaType] = field(default_factory=set)
    aliases: dict[MediaType, MediaType] = field(default_factory=dict)
    inheritance: dict[MediaType, MediaType] = field(default_factory=dict)

    def add_type(self, media_type: MediaType) -> None:
        """Register a canonical type (parameters are dropped)."""
        self.types.add(media_type.base_type)

    def add_alias(self, media_type: MediaType, alias: MediaType) -> None:
        """Register ``alias`` as another name for ``media_type``.

        Raises:
            ValueError: If ``alias`` is already registered for a different type.
        """
        canonical: MediaType = media_type.base_type
        existing: MediaType | None = self.aliases.get(alias.base_type)
        if existing is not None and existing != canonical:
            raise ValueError(f"Alias {alias} already registered for {existing}")
        self.add_type(canonical)
        self.aliases[alias.base_type] = canonical

    def add_supertype(self, media_type: MediaType, supertype: MediaType) -> None:
        """Record ``supertype`` as the parent of ``media_type``."""
        self.add_type(media_type)
        self.inheritance[media_type.base_type] = supertype.base_type

    def add_types(self, media_types: Iterable[MediaType]) -> None:
        """Register several canonical types at once."""
        for t in media_types:
            self.add_type(t)

    def freeze(self) -> MediaTypeRegistry:
        """Return an immutable snapshot of this builder."""
        logger.trace(
            "Freezing media type registry: %d types, %d aliases, %d supertype links",
            len(self.types),
            len(self.aliases),
            len(self.inheritance),
        )
        return MediaTypeRegistry(
            types=frozenset(self.types),
            aliases=MappingProxyType(dict(self.aliases)),
            inheritance=MappingProxyType(dict(self.inheritance)),
        )
