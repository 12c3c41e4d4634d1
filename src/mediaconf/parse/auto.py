# topmark:header:start
#
#   project      : MediaConf
#   file         : auto.py
#   file_relpath : src/mediaconf/parse/auto.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Auto-detecting parser.

[`AutoDetectParser`][mediaconf.parse.auto.AutoDetectParser] is a bootstrap convenience:
it detects the type of a document with the configuration's detector, records it in the
metadata and then dispatches through the configuration's parser. It cannot be declared
inside a ``<parsers>`` configuration element.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Mapping

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import CONTENT_TYPE_KEY
from mediaconf.parse.composite import CompositeParser
from mediaconf.utils.streams import ensure_seekable

if TYPE_CHECKING:
    from mediaconf.config.model import MediaConfig
    from mediaconf.detect.base import Detector
    from mediaconf.mime.types import MediaType
    from mediaconf.parse.base import Metadata, ParseContext, ParsedContent

logger: MediaconfLogger = get_logger(__name__)


class AutoDetectParser(CompositeParser):
    """Detect, then dispatch.

    Args:
        config (MediaConfig | None): Source of the registry, detector and parser; the
            default configuration when None.
    """

    def __init__(self, config: MediaConfig | None = None) -> None:
        if config is None:
            from mediaconf.config.environment import get_default_config

            config = get_default_config()
        super().__init__(config.media_type_registry, [config.parser])
        self._detector: Detector = config.detector

    @property
    def detector(self) -> Detector:
        """Detector used to classify incoming documents."""
        return self._detector

    def detect(self, stream: BinaryIO | None, metadata: Mapping[str, str]) -> MediaType:
        """Classify ``stream`` with the configured detector."""
        return self._detector.detect(stream, metadata)

    def parse(
        self,
        stream: BinaryIO,
        metadata: Metadata,
        context: ParseContext | None = None,
    ) -> ParsedContent:
        seekable: BinaryIO = ensure_seekable(stream)
        media_type: MediaType = self.detect(seekable, metadata)
        logger.debug("Auto-detected %s", media_type)
        metadata[CONTENT_TYPE_KEY] = str(media_type)
        return super().parse(seekable, metadata, context)
