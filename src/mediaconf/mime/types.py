# topmark:header:start
#
#   project      : MediaConf
#   file         : types.py
#   file_relpath : src/mediaconf/mime/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Media type value object.

A [`MediaType`][mediaconf.mime.types.MediaType] is an immutable ``type/subtype`` pair with
optional parameters (``text/plain; charset=utf-8``). Instances are normalized on
construction (lower-cased names, sorted parameters) so equality and hashing are by the
normalized string form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar, Final, Iterable

from mediaconf.errors import MediaTypeError

# RFC 6838 restricted-name characters, plus '_' and '.'.
_TOKEN: Final[str] = r"[A-Za-z0-9][A-Za-z0-9!#$&^_.+\-]*"
_TYPE_RE: Final[re.Pattern[str]] = re.compile(rf"^\s*({_TOKEN})\s*/\s*({_TOKEN})\s*$")
_PARAM_RE: Final[re.Pattern[str]] = re.compile(
    rf'^\s*({_TOKEN})\s*=\s*("(?:[^"\\]|\\.)*"|[^\s;"]+)\s*$'
)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return re.sub(r"\\(.)", r"\1", value[1:-1])
    return value


@dataclass(frozen=True, order=True)
class MediaType:
    """A normalized media type identifier.

    Attributes:
        type (str): Top-level type (e.g. ``"application"``), lower-cased.
        subtype (str): Subtype (e.g. ``"pdf"``), lower-cased.
        parameters (tuple[tuple[str, str], ...]): Parameters as sorted ``(name, value)``
            pairs; names are lower-cased, values kept verbatim.
    """

    type: str
    subtype: str
    parameters: tuple[tuple[str, str], ...] = field(default=())

    OCTET_STREAM: ClassVar[MediaType]
    TEXT_PLAIN: ClassVar[MediaType]
    APPLICATION_XML: ClassVar[MediaType]
    APPLICATION_ZIP: ClassVar[MediaType]
    EMPTY: ClassVar[MediaType]

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", self.type.strip().lower())
        object.__setattr__(self, "subtype", self.subtype.strip().lower())
        params: dict[str, str] = {}
        for name, value in self.parameters:
            params[name.strip().lower()] = value
        object.__setattr__(self, "parameters", tuple(sorted(params.items())))

    def __str__(self) -> str:
        if not self.parameters:
            return f"{self.type}/{self.subtype}"
        rendered: str = "; ".join(f"{k}={_quote(v)}" for k, v in self.parameters)
        return f"{self.type}/{self.subtype}; {rendered}"

    @classmethod
    def parse(cls, text: str) -> MediaType:
        """Parse a media type string.

        Args:
            text (str): The text to parse, e.g. ``"text/html; charset=UTF-8"``.

        Returns:
            MediaType: The parsed media type.

        Raises:
            MediaTypeError: If ``text`` is not a well-formed media type.
        """
        if not isinstance(text, str):
            raise MediaTypeError(f"Invalid media type name: {text!r}")
        head, *raw_params = text.split(";")
        m: re.Match[str] | None = _TYPE_RE.match(head)
        if m is None:
            raise MediaTypeError(f"Invalid media type name: {text!r}")
        params: list[tuple[str, str]] = []
        for raw in raw_params:
            if not raw.strip():
                continue
            pm: re.Match[str] | None = _PARAM_RE.match(raw)
            if pm is None:
                raise MediaTypeError(f"Invalid media type parameter in {text!r}: {raw.strip()!r}")
            params.append((pm.group(1), _unquote(pm.group(2))))
        return cls(m.group(1), m.group(2), tuple(params))

    @classmethod
    def try_parse(cls, text: str | None) -> MediaType | None:
        """Parse a media type string, returning None instead of raising."""
        if text is None:
            return None
        try:
            return cls.parse(text)
        except MediaTypeError:
            return None

    @classmethod
    def application(cls, subtype: str) -> MediaType:
        """Return ``application/<subtype>``."""
        return cls("application", subtype)

    @classmethod
    def text(cls, subtype: str) -> MediaType:
        """Return ``text/<subtype>``."""
        return cls("text", subtype)

    @classmethod
    def set_of(cls, *names: str | MediaType) -> frozenset[MediaType]:
        """Return a frozenset of media types parsed from ``names``.

        Raises:
            MediaTypeError: If any of the names is malformed.
        """
        return frozenset(n if isinstance(n, MediaType) else cls.parse(n) for n in names)

    @property
    def base_type(self) -> MediaType:
        """This media type without its parameters."""
        if not self.parameters:
            return self
        return MediaType(self.type, self.subtype)

    @property
    def has_parameters(self) -> bool:
        """Whether any parameters are present."""
        return bool(self.parameters)

    def parameter(self, name: str) -> str | None:
        """Return the value of parameter ``name`` (case-insensitive), or None."""
        key: str = name.lower()
        for k, v in self.parameters:
            if k == key:
                return v
        return None

    def with_parameters(self, params: Iterable[tuple[str, str]]) -> MediaType:
        """Return a copy of this type carrying ``params`` merged over the existing ones."""
        merged: dict[str, str] = dict(self.parameters)
        merged.update((k.lower(), v) for k, v in params)
        return MediaType(self.type, self.subtype, tuple(merged.items()))


def _quote(value: str) -> str:
    if value and re.fullmatch(r"[A-Za-z0-9!#$&^_.+\-]+", value):
        return value
    escaped: str = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


MediaType.OCTET_STREAM = MediaType("application", "octet-stream")
MediaType.TEXT_PLAIN = MediaType("text", "plain")
MediaType.APPLICATION_XML = MediaType("application", "xml")
MediaType.APPLICATION_ZIP = MediaType("application", "zip")
MediaType.EMPTY = MediaType("application", "x-empty")
