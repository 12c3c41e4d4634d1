# topmark:header:start
#
#   project      : MediaConf
#   file         : streams.py
#   file_relpath : src/mediaconf/utils/streams.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Byte stream helpers shared by detectors and parsers."""

from __future__ import annotations

import io
from typing import BinaryIO


def ensure_seekable(stream: BinaryIO) -> BinaryIO:
    """Return ``stream`` if it can seek, otherwise an in-memory copy of its remaining bytes."""
    if stream.seekable():
        return stream
    return io.BytesIO(stream.read())


def peek(stream: BinaryIO | None, length: int) -> bytes:
    """Read up to ``length`` leading bytes and restore the stream position.

    Args:
        stream (BinaryIO | None): A seekable binary stream, or None.
        length (int): Maximum number of bytes to read.

    Returns:
        bytes: The bytes read (empty for a None or exhausted stream).

    Raises:
        ValueError: If the stream cannot seek back.
    """
    if stream is None:
        return b""
    if not stream.seekable():
        raise ValueError("Detection requires a seekable stream; wrap it with ensure_seekable()")
    pos: int = stream.tell()
    try:
        return stream.read(length)
    finally:
        stream.seek(pos)
