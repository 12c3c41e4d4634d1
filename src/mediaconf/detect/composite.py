# topmark:header:start
#
#   project      : MediaConf
#   file         : composite.py
#   file_relpath : src/mediaconf/detect/composite.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Composite detector: asks an ordered list of detectors and keeps the most specific answer."""

from __future__ import annotations

from typing import Any, BinaryIO, ClassVar, Iterable, Mapping, Sequence

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.detect.base import Detector
from mediaconf.mime.registry import MediaTypeRegistry
from mediaconf.mime.types import MediaType
from mediaconf.services.shapes import ConstructionShape

logger: MediaconfLogger = get_logger(__name__)


def is_excluded(obj: Any, excluded: Iterable[type[Any]]) -> bool:
    """Return True if ``obj``'s class is a subclass of any class in ``excluded``."""
    classes: tuple[type[Any], ...] = tuple(excluded)
    return bool(classes) and isinstance(obj, classes)


class CompositeDetector(Detector):
    """Detector that combines the answers of several child detectors.

    Children are asked in order, starting from ``application/octet-stream``; an answer
    replaces the current best guess only when it is a specialization of it.

    Args:
        registry (MediaTypeRegistry): Registry used to compare answers.
        detectors (Sequence[Detector]): Child detectors, in priority order.
        excluded (Iterable[type[Detector]] | None): Classes whose instances are dropped
            from ``detectors``.
    """

    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset(
        {
            ConstructionShape.FROM_CHILDREN_EXCLUDING,
            ConstructionShape.FROM_CHILDREN,
            ConstructionShape.FROM_LIST,
        }
    )

    def __init__(
        self,
        registry: MediaTypeRegistry,
        detectors: Sequence[Detector],
        excluded: Iterable[type[Detector]] | None = None,
    ) -> None:
        skip: tuple[type[Detector], ...] = tuple(excluded or ())
        self._registry: MediaTypeRegistry = registry
        self._detectors: tuple[Detector, ...] = tuple(
            d for d in detectors if not is_excluded(d, skip)
        )
        if len(self._detectors) != len(detectors):
            logger.debug(
                "%s dropped %d excluded detector(s)",
                self.__class__.__name__,
                len(detectors) - len(self._detectors),
            )

    def __repr__(self) -> str:
        inner: str = ", ".join(repr(d) for d in self._detectors)
        return f"{self.__class__.__name__}([{inner}])"

    @classmethod
    def from_children(
        cls,
        registry: MediaTypeRegistry,
        children: Sequence[Detector],
        excluded: Iterable[type[Detector]] | None = None,
    ) -> CompositeDetector:
        """Build from a registry, explicit children and optional exclusions."""
        return cls(registry, children, excluded)

    @classmethod
    def from_list(cls, children: Sequence[Detector]) -> CompositeDetector:
        """Build from explicit children, comparing answers with structural rules only."""
        return cls(MediaTypeRegistry.empty(), children)

    @property
    def registry(self) -> MediaTypeRegistry:
        """Registry used to compare child answers."""
        return self._registry

    @property
    def detectors(self) -> tuple[Detector, ...]:
        """Child detectors in priority order."""
        return self._detectors

    def detect(self, stream: BinaryIO | None, metadata: Mapping[str, str]) -> MediaType:
        """Return the most specific type reported by any child."""
        detected: MediaType = MediaType.OCTET_STREAM
        for detector in self._detectors:
            candidate: MediaType = detector.detect(stream, metadata)
            if self._registry.is_specialization_of(candidate, detected):
                detected = candidate
        logger.trace("%s detected %s", self.__class__.__name__, detected)
        return detected
