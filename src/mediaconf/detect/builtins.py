# topmark:header:start
#
#   project      : MediaConf
#   file         : builtins.py
#   file_relpath : src/mediaconf/detect/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in leaf detectors.

These are small, fast heuristics registered in the packaged service manifest and picked
up by [`DefaultDetector`][mediaconf.detect.default.DefaultDetector].
"""

from __future__ import annotations

from typing import BinaryIO, Final, Mapping

from mediaconf.constants import CONTENT_TYPE_KEY
from mediaconf.detect.base import Detector
from mediaconf.mime.types import MediaType
from mediaconf.utils.streams import peek

# Bytes inspected by the text heuristic.
TEXT_WINDOW: Final[int] = 512

# Control characters that may appear in text (TAB, LF, FF, CR, ESC).
_TEXT_CONTROLS: Final[frozenset[int]] = frozenset({0x09, 0x0A, 0x0C, 0x0D, 0x1B})


class ZeroSizeFileDetector(Detector):
    """Report ``application/x-empty`` for a stream with no bytes."""

    def detect(self, stream: BinaryIO | None, metadata: Mapping[str, str]) -> MediaType:
        if stream is not None and peek(stream, 1) == b"":
            return MediaType.EMPTY
        return MediaType.OCTET_STREAM


class TypeDetector(Detector):
    """Trust a well-formed ``Content-Type`` hint from the metadata."""

    def detect(self, stream: BinaryIO | None, metadata: Mapping[str, str]) -> MediaType:
        hint: MediaType | None = MediaType.try_parse(metadata.get(CONTENT_TYPE_KEY))
        return hint.base_type if hint is not None else MediaType.OCTET_STREAM


class TextDetector(Detector):
    """Report ``text/plain`` when the leading bytes look like text.

    The leading window must be non-empty, contain no NUL bytes, have few C0 control
    characters, and decode as UTF-8 (a multi-byte sequence cut at the window edge is
    tolerated).
    """

    def __init__(self, window: int = TEXT_WINDOW) -> None:
        self.window = window

    def detect(self, stream: BinaryIO | None, metadata: Mapping[str, str]) -> MediaType:
        head: bytes = peek(stream, self.window)
        if not head or b"\x00" in head:
            return MediaType.OCTET_STREAM
        controls: int = sum(1 for b in head if b < 0x20 and b not in _TEXT_CONTROLS)
        if controls * 10 > len(head):
            return MediaType.OCTET_STREAM
        try:
            head.decode("utf-8")
        except UnicodeDecodeError as exc:
            if exc.start < len(head) - 3:
                return MediaType.OCTET_STREAM
        return MediaType.TEXT_PLAIN
