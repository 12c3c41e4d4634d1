# topmark:header:start
#
#   project      : MediaConf
#   file         : default.py
#   file_relpath : src/mediaconf/detect/default.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default detector built from the type repository plus every auto-discovered detector."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Iterable

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.detect.composite import CompositeDetector
from mediaconf.services.loader import ServiceFamily, ServiceLoader
from mediaconf.services.shapes import ConstructionShape

if TYPE_CHECKING:
    from mediaconf.detect.base import Detector
    from mediaconf.mime.repository import MimeRepository

logger: MediaconfLogger = get_logger(__name__)


class DefaultDetector(CompositeDetector):
    """Composite of the repository followed by all ``auto`` detectors in the service loader.

    The repository is asked first; the generic heuristics only replace its answer with a
    specialization of it (``text/plain`` or ``application/x-empty`` over an unknown type).

    Args:
        repository (MimeRepository): Full type repository; its registry compares answers.
        loader (ServiceLoader | None): Source of detectors; the packaged manifest when None.
        excluded (Iterable[type[Detector]] | None): Detector classes to leave out.
    """

    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset(
        {ConstructionShape.FROM_LOADER}
    )

    def __init__(
        self,
        repository: MimeRepository,
        loader: ServiceLoader | None = None,
        excluded: Iterable[type[Detector]] | None = None,
    ) -> None:
        skip: tuple[type[Detector], ...] = tuple(excluded or ())
        source: ServiceLoader = loader if loader is not None else ServiceLoader.builtin()
        detectors: list[Detector] = [repository]
        detectors.extend(source.load_services(ServiceFamily.DETECTOR, skip))
        logger.debug(
            "DefaultDetector assembled %d detector(s): %s",
            len(detectors),
            ", ".join(d.__class__.__name__ for d in detectors),
        )
        super().__init__(repository.registry, detectors, skip)
        self.repository = repository

    @classmethod
    def from_loader(
        cls,
        repository: MimeRepository,
        loader: ServiceLoader,
        excluded: Iterable[type[Detector]] | None = None,
    ) -> DefaultDetector:
        """Build from the full repository, a service loader and exclusions."""
        return cls(repository, loader, excluded)
