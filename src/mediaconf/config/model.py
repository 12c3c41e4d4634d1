# topmark:header:start
#
#   project      : MediaConf
#   file         : model.py
#   file_relpath : src/mediaconf/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable resolved configuration.

A [`MediaConfig`][mediaconf.config.model.MediaConfig] is the result of one configuration
load: the type repository plus exactly one detector, one parser and one translator.
There is no implicit singleton; callers build and own as many as they need.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mediaconf.parse.auto import AutoDetectParser
from mediaconf.parse.composite import CompositeParser

if TYPE_CHECKING:
    from mediaconf.detect.base import Detector
    from mediaconf.mime.registry import MediaTypeRegistry
    from mediaconf.mime.repository import MimeRepository
    from mediaconf.mime.types import MediaType
    from mediaconf.parse.base import Parser
    from mediaconf.translate.base import Translator


@dataclass(frozen=True)
class MediaConfig:
    """Resolved configuration snapshot.

    Attributes:
        mime_repository (MimeRepository): Full type repository (registry, globs, magic).
        detector (Detector): Top-level detector.
        parser (Parser): Top-level parser.
        translator (Translator): The translator.
        source (str): Where the configuration came from (path, URL, ``<builtin>``...).
    """

    mime_repository: MimeRepository
    detector: Detector
    parser: Parser
    translator: Translator
    source: str = "<element>"

    @property
    def media_type_registry(self) -> MediaTypeRegistry:
        """The frozen media type registry."""
        return self.mime_repository.registry

    def parser_for(self, media_type: MediaType) -> Parser | None:
        """Return the parser that would handle ``media_type``, or None.

        For a composite top-level parser this follows the dispatch table (walking
        supertypes); otherwise the top-level parser is returned if it advertises the
        type.
        """
        if isinstance(self.parser, CompositeParser):
            chosen: Parser = self.parser.find_parser(media_type)
            return None if chosen is self.parser.fallback else chosen
        normalized: MediaType = self.media_type_registry.normalize(media_type)
        if normalized in self.parser.get_supported_types():
            return self.parser
        return None

    def auto_detect_parser(self) -> AutoDetectParser:
        """Build an `AutoDetectParser` driven by this configuration."""
        return AutoDetectParser(self)
