# topmark:header:start
#
#   project      : MediaConf
#   file         : base.py
#   file_relpath : src/mediaconf/detect/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Abstract base class for all detector implementations.

A detector classifies a byte stream (plus optional metadata such as the resource name or
a declared ``Content-Type``) into a [`MediaType`][mediaconf.mime.types.MediaType].
Detectors must leave the stream position unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, BinaryIO, Mapping

from mediaconf.services.shapes import Constructible

if TYPE_CHECKING:
    from mediaconf.mime.types import MediaType


class Detector(Constructible, ABC):
    """Classifies a byte stream into a media type."""

    @abstractmethod
    def detect(self, stream: BinaryIO | None, metadata: Mapping[str, str]) -> MediaType:
        """Detect the media type of ``stream``.

        Args:
            stream (BinaryIO | None): Seekable stream positioned at the start of the
                document, or None when only metadata is available.
            metadata (Mapping[str, str]): Known facts about the document
                (``resourceName``, ``Content-Type``).

        Returns:
            MediaType: The detected type; ``application/octet-stream`` when unknown.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
