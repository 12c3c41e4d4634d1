# topmark:header:start
#
#   project      : MediaConf
#   file         : bindings.py
#   file_relpath : src/mediaconf/config/bindings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Capability bindings for the generic composite loader.

A binding tells [`mediaconf.config.loader`][mediaconf.config.loader] everything that is
specific to one capability family:

* the parent and item tag names (``detectors``/``detector``, ``parsers``/``parser``);
* how to recognize a composite (or decorator) instance or class;
* how to build the family's default and plain composite;
* which construction shapes to try, in which order, and how to call each one;
* how to decorate a freshly built instance.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Sequence

from mediaconf.config.document import iter_texts
from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import (
    EXCLUDE_SUFFIX,
    TAG_DETECTOR,
    TAG_DETECTORS,
    TAG_MIME,
    TAG_MIME_EXCLUDE,
    TAG_PARSER,
    TAG_PARSERS,
)
from mediaconf.detect.composite import CompositeDetector
from mediaconf.detect.default import DefaultDetector
from mediaconf.errors import ConfigurationError, MediaTypeError
from mediaconf.mime.types import MediaType
from mediaconf.parse.auto import AutoDetectParser
from mediaconf.parse.composite import CompositeParser
from mediaconf.parse.decorator import ParserDecorator
from mediaconf.parse.default import DefaultParser
from mediaconf.services.loader import ServiceFamily
from mediaconf.services.shapes import ConstructionShape

if TYPE_CHECKING:
    from mediaconf.detect.base import Detector
    from mediaconf.mime.repository import MimeRepository
    from mediaconf.parse.base import Parser
    from mediaconf.services.loader import ServiceLoader

logger: MediaconfLogger = get_logger(__name__)


class CapabilityBinding(ABC):
    """Family-specific strategy consumed by the generic loader.

    Attributes:
        family (ServiceFamily): Service family used to resolve ``class`` names.
        parent_tag (str): Tag of the single container element under the root.
        item_tag (str): Tag of an implementation element.
        shape_priority (tuple[ConstructionShape, ...]): Shapes tried, in order, when
            building a declared composite or decorator class.
    """

    family: ClassVar[ServiceFamily]
    parent_tag: ClassVar[str]
    item_tag: ClassVar[str]
    shape_priority: ClassVar[tuple[ConstructionShape, ...]]

    @property
    def exclude_tag(self) -> str:
        """Tag naming an implementation to leave out of a composite."""
        return f"{self.item_tag}{EXCLUDE_SUFFIX}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.parent_tag}/{self.item_tag})"

    @abstractmethod
    def is_composite(self, target: Any) -> bool:
        """Return True if ``target`` (an instance or a class) aggregates other instances."""
        ...

    @abstractmethod
    def create_default(self, repository: MimeRepository, loader: ServiceLoader) -> Any:
        """Build the family default used when no items are declared."""
        ...

    @abstractmethod
    def create_composite(
        self,
        children: Sequence[Any],
        repository: MimeRepository,
        loader: ServiceLoader,
    ) -> Any:
        """Build a plain composite wrapping ``children`` in order."""
        ...

    def check_allowed(self, cls: type[Any], name: str) -> None:
        """Reject classes that may not be declared in a configuration element.

        Raises:
            ConfigurationError: If ``cls`` is not allowed.
        """
        return None

    def applies(self, shape: ConstructionShape, cls: type[Any]) -> bool:
        """Return True if ``shape`` may be used for ``cls`` in this family."""
        return shape in self.shape_priority

    def registry_source(self, repository: MimeRepository) -> Any:
        """Return the first argument passed to ``from_loader``."""
        return repository.registry

    def build(
        self,
        shape: ConstructionShape,
        cls: type[Any],
        children: Sequence[Any],
        excluded: Sequence[type[Any]],
        repository: MimeRepository,
        loader: ServiceLoader,
    ) -> Any:
        """Invoke the construction entry point of ``cls`` that matches ``shape``."""
        if shape is ConstructionShape.FROM_LOADER:
            return cls.from_loader(self.registry_source(repository), loader, list(excluded))
        if shape is ConstructionShape.FROM_CHILDREN_EXCLUDING:
            return cls.from_children(repository.registry, list(children), list(excluded))
        if shape is ConstructionShape.FROM_CHILDREN:
            return cls.from_children(repository.registry, list(children))
        if shape is ConstructionShape.FROM_LIST:
            return cls.from_list(list(children))
        raise ValueError(f"{self!r} cannot build shape {shape.name}")

    def decorate(self, instance: Any, element: ET.Element) -> Any:
        """Post-process a freshly built instance (no-op by default)."""
        return instance


class DetectorBinding(CapabilityBinding):
    """Binding for ``<detectors>/<detector>`` elements."""

    family: ClassVar[ServiceFamily] = ServiceFamily.DETECTOR
    parent_tag: ClassVar[str] = TAG_DETECTORS
    item_tag: ClassVar[str] = TAG_DETECTOR
    shape_priority: ClassVar[tuple[ConstructionShape, ...]] = (
        ConstructionShape.FROM_LOADER,
        ConstructionShape.FROM_CHILDREN_EXCLUDING,
        ConstructionShape.FROM_CHILDREN,
        ConstructionShape.FROM_LIST,
    )

    def is_composite(self, target: Any) -> bool:
        if isinstance(target, type):
            return issubclass(target, CompositeDetector)
        return isinstance(target, CompositeDetector)

    def registry_source(self, repository: MimeRepository) -> Any:
        # Detectors built from a loader receive the full repository (magic and globs).
        return repository

    def create_default(self, repository: MimeRepository, loader: ServiceLoader) -> Detector:
        return DefaultDetector(repository, loader)

    def create_composite(
        self,
        children: Sequence[Any],
        repository: MimeRepository,
        loader: ServiceLoader,
    ) -> Detector:
        return CompositeDetector(repository.registry, list(children))


class ParserBinding(CapabilityBinding):
    """Binding for ``<parsers>/<parser>`` elements.

    Decoration reads the direct ``<mime>`` and ``<mime-exclude>`` children of the
    element: a non-empty inclusion list restricts the advertised types, then a
    non-empty exclusion list removes types from what remains.
    """

    family: ClassVar[ServiceFamily] = ServiceFamily.PARSER
    parent_tag: ClassVar[str] = TAG_PARSERS
    item_tag: ClassVar[str] = TAG_PARSER
    shape_priority: ClassVar[tuple[ConstructionShape, ...]] = (
        ConstructionShape.FROM_LOADER,
        ConstructionShape.FROM_CHILDREN_EXCLUDING,
        ConstructionShape.FROM_CHILDREN,
        ConstructionShape.WRAPPING,
    )

    def is_composite(self, target: Any) -> bool:
        composite_types: tuple[type[Any], ...] = (CompositeParser, ParserDecorator)
        if isinstance(target, type):
            return issubclass(target, composite_types)
        return isinstance(target, composite_types)

    def check_allowed(self, cls: type[Any], name: str) -> None:
        if issubclass(cls, AutoDetectParser):
            raise ConfigurationError(
                f"AutoDetectParser not supported in a <{self.item_tag}> "
                f"configuration element: {name}"
            )

    def applies(self, shape: ConstructionShape, cls: type[Any]) -> bool:
        if shape is ConstructionShape.WRAPPING:
            return issubclass(cls, ParserDecorator) and not issubclass(cls, CompositeParser)
        return super().applies(shape, cls)

    def build(
        self,
        shape: ConstructionShape,
        cls: type[Any],
        children: Sequence[Any],
        excluded: Sequence[type[Any]],
        repository: MimeRepository,
        loader: ServiceLoader,
    ) -> Any:
        if shape is not ConstructionShape.WRAPPING:
            return super().build(shape, cls, children, excluded, repository, loader)
        inner: Parser
        if len(children) == 1 and not excluded and isinstance(children[0], CompositeParser):
            inner = children[0]
        else:
            inner = CompositeParser(repository.registry, list(children), list(excluded))
        return cls.wrapping(inner)

    def create_default(self, repository: MimeRepository, loader: ServiceLoader) -> Parser:
        return DefaultParser(repository.registry, loader)

    def create_composite(
        self,
        children: Sequence[Any],
        repository: MimeRepository,
        loader: ServiceLoader,
    ) -> Parser:
        return CompositeParser(repository.registry, list(children))

    def decorate(self, instance: Any, element: ET.Element) -> Any:
        parser: Parser = instance
        included: set[MediaType] = self._read_types(element, TAG_MIME)
        if included:
            logger.debug("Restricting %r to %d type(s)", parser, len(included))
            parser = ParserDecorator.with_types(parser, included)
        excluded: set[MediaType] = self._read_types(element, TAG_MIME_EXCLUDE)
        if excluded:
            logger.debug("Excluding %d type(s) from %r", len(excluded), parser)
            parser = ParserDecorator.without_types(parser, excluded)
        return parser

    @staticmethod
    def _read_types(element: ET.Element, tag: str) -> set[MediaType]:
        types: set[MediaType] = set()
        for text in iter_texts(element, tag):
            try:
                types.add(MediaType.parse(text))
            except MediaTypeError as exc:
                raise ConfigurationError(f"Invalid media type name: {text}") from exc
        return types
