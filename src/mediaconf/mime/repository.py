# topmark:header:start
#
#   project      : MediaConf
#   file         : repository.py
#   file_relpath : src/mediaconf/mime/repository.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Media type repository: registry plus name and magic detection rules.

A [`MimeRepository`][mediaconf.mime.repository.MimeRepository] bundles a frozen
[`MediaTypeRegistry`][mediaconf.mime.registry.MediaTypeRegistry] with per-type
descriptions, filename globs and leading-byte signatures. It is the "full registry
source" handed to detector composites and is itself a leaf detector.

Repositories are described in TOML and parsed with `tomlkit`:

```toml
[[types]]
name = "application/pdf"
description = "Portable Document Format"
aliases = ["application/x-pdf"]
supertype = "application/octet-stream"   # optional
globs = ["*.pdf"]
magic = ["%PDF-"]                         # latin-1 text, \\u escapes allowed
```

The built-in repository is packaged as ``mediaconf/mime/mediaconf-types.toml``.
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, BinaryIO, Mapping, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import (
    BUILTIN_TYPES_PACKAGE,
    BUILTIN_TYPES_RESOURCE,
    CONTENT_TYPE_KEY,
    RESOURCE_NAME_KEY,
)
from mediaconf.detect.base import Detector
from mediaconf.errors import ConfigurationError, MediaTypeError
from mediaconf.mime.registry import MediaTypeRegistry, MutableMediaTypeRegistry
from mediaconf.mime.types import MediaType
from mediaconf.utils.streams import peek

if TYPE_CHECKING:
    from importlib.abc import Traversable

logger: MediaconfLogger = get_logger(__name__)

# Leading window inspected for magic signatures.
MAGIC_WINDOW: int = 4096


@dataclass(frozen=True)
class MimeTypeInfo:
    """Detection rules and description for one canonical media type.

    Attributes:
        media_type (MediaType): The canonical type.
        description (str): Human-readable description.
        globs (tuple[str, ...]): Filename globs (``fnmatch`` syntax, case-insensitive).
        magic (tuple[bytes, ...]): Leading-byte signatures.
    """

    media_type: MediaType
    description: str = ""
    globs: tuple[str, ...] = ()
    magic: tuple[bytes, ...] = ()


class MimeRepository(Detector):
    """Registry of media types with glob and magic detection.

    Args:
        registry (MediaTypeRegistry | None): Frozen type registry; empty when None.
        infos (Mapping[MediaType, MimeTypeInfo]): Detection rules keyed by canonical type.
        source (str): Where the repository was read from (for diagnostics).
    """

    def __init__(
        self,
        registry: MediaTypeRegistry | None = None,
        infos: Mapping[MediaType, MimeTypeInfo] | None = None,
        *,
        source: str = "<memory>",
    ) -> None:
        self._registry: MediaTypeRegistry = (
            registry if registry is not None else MediaTypeRegistry.empty()
        )
        self._infos: Mapping[MediaType, MimeTypeInfo] = MappingProxyType(dict(infos or {}))
        self.source: str = source

    def __repr__(self) -> str:
        return f"MimeRepository(source={self.source!r}, types={len(self._registry)})"

    @property
    def registry(self) -> MediaTypeRegistry:
        """The frozen media type registry."""
        return self._registry

    def get_info(self, media_type: MediaType) -> MimeTypeInfo | None:
        """Return the detection rules registered for ``media_type`` (after normalization)."""
        return self._infos.get(self._registry.normalize(media_type).base_type)

    def infos(self) -> tuple[MimeTypeInfo, ...]:
        """Return all detection rule sets, sorted by media type."""
        return tuple(self._infos[k] for k in sorted(self._infos))

    # --- Detection ---

    def detect_by_magic(self, head: bytes) -> MediaType | None:
        """Return the type whose longest signature prefixes ``head``, or None."""
        best: MediaType | None = None
        best_len: int = 0
        for info in self._infos.values():
            for sig in info.magic:
                if len(sig) > best_len and head.startswith(sig):
                    best, best_len = info.media_type, len(sig)
        return best

    def detect_by_name(self, name: str) -> MediaType | None:
        """Return the type whose most specific glob matches the basename of ``name``."""
        base: str = name.replace("\\", "/").rsplit("/", 1)[-1].lower()
        if not base:
            return None
        best: MediaType | None = None
        best_len: int = 0
        for info in self._infos.values():
            for pattern in info.globs:
                if len(pattern) > best_len and fnmatch.fnmatchcase(base, pattern.lower()):
                    best, best_len = info.media_type, len(pattern)
        return best

    def detect(self, stream: BinaryIO | None, metadata: Mapping[str, str]) -> MediaType:
        """Detect using magic first, then the resource name, then any declared type.

        The name-based or declared type replaces the magic result only when it is a
        specialization of it (e.g. ``*.docx`` refines a zip signature).
        """
        detected: MediaType = MediaType.OCTET_STREAM

        by_magic: MediaType | None = self.detect_by_magic(peek(stream, MAGIC_WINDOW))
        if by_magic is not None:
            detected = by_magic

        name: str | None = metadata.get(RESOURCE_NAME_KEY)
        if name:
            by_name: MediaType | None = self.detect_by_name(name)
            if by_name is not None and (
                by_magic is None or self._registry.is_specialization_of(by_name, detected)
            ):
                detected = by_name

        hint: MediaType | None = MediaType.try_parse(metadata.get(CONTENT_TYPE_KEY))
        if hint is not None:
            hint = self._registry.normalize(hint).base_type
            if self._registry.is_specialization_of(hint, detected):
                detected = hint

        logger.trace("MimeRepository detected %s (metadata=%r)", detected, dict(metadata))
        return detected

    # --- Loading ---

    @classmethod
    def from_toml_text(cls, text: str, *, source: str = "<string>") -> MimeRepository:
        """Build a repository from TOML text.

        Args:
            text (str): TOML document text.
            source (str): Label used in error messages.

        Returns:
            MimeRepository: The parsed repository.

        Raises:
            ConfigurationError: If the TOML is malformed or declares invalid types.
        """
        try:
            doc: dict[str, Any] = tomlkit.parse(text).unwrap()
        except TomlkitParseError as exc:
            raise ConfigurationError(f"Media type repository has syntax errors: {source}") from exc

        raw_types: Any = doc.get("types", [])
        if not isinstance(raw_types, list):
            raise ConfigurationError(f"Media type repository {source}: 'types' must be an array")

        draft = MutableMediaTypeRegistry()
        infos: dict[MediaType, MimeTypeInfo] = {}
        for idx, raw in enumerate(cast("list[Any]", raw_types)):
            if not isinstance(raw, dict):
                raise ConfigurationError(
                    f"Media type repository {source}: entry {idx} is not a table"
                )
            entry: dict[str, Any] = cast("dict[str, Any]", raw)
            try:
                info: MimeTypeInfo = _read_entry(entry, draft)
            except (MediaTypeError, ValueError, TypeError) as exc:
                raise ConfigurationError(
                    f"Media type repository {source}: invalid entry {entry.get('name')!r}"
                ) from exc
            infos[info.media_type] = info

        logger.debug("Loaded %d media types from %s", len(infos), source)
        return cls(draft.freeze(), infos, source=source)

    @classmethod
    def load_resource(cls, resource: str, *, base_dir: Path | None = None) -> MimeRepository:
        """Load a repository named by a ``<mimeTypeRepository resource="...">`` attribute.

        Resolution order: packaged resource of ``mediaconf.mime``; file relative to
        ``base_dir`` (the configuration document's directory); file relative to the
        working directory (or absolute path).

        Raises:
            ConfigurationError: If the resource cannot be found or read.
        """
        packaged: Traversable = files(BUILTIN_TYPES_PACKAGE).joinpath(resource)
        candidates: list[Path] = []
        if base_dir is not None:
            candidates.append(base_dir / resource)
        candidates.append(Path(resource))

        try:
            if packaged.is_file():
                return cls.from_toml_text(packaged.read_text(encoding="utf-8"), source=resource)
            for path in candidates:
                if path.is_file():
                    return cls.from_toml_text(path.read_text(encoding="utf-8"), source=str(path))
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Unable to read media type repository: {resource}") from exc
        raise ConfigurationError(f"Media type repository not found: {resource}")


def _read_entry(entry: dict[str, Any], draft: MutableMediaTypeRegistry) -> MimeTypeInfo:
    media_type: MediaType = MediaType.parse(str(entry["name"])).base_type
    draft.add_type(media_type)
    for alias in entry.get("aliases", []):
        draft.add_alias(media_type, MediaType.parse(str(alias)))
    supertype: Any = entry.get("supertype")
    if supertype:
        draft.add_supertype(media_type, MediaType.parse(str(supertype)))
    return MimeTypeInfo(
        media_type=media_type,
        description=str(entry.get("description", "")),
        globs=tuple(str(g) for g in entry.get("globs", [])),
        magic=tuple(str(m).encode("latin-1") for m in entry.get("magic", [])),
    )


@lru_cache(maxsize=1)
def get_builtin_repository() -> MimeRepository:
    """Return (and cache) the packaged built-in media type repository."""
    return MimeRepository.load_resource(BUILTIN_TYPES_RESOURCE)
