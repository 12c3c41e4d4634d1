# topmark:header:start
#
#   project      : MediaConf
#   file         : errors.py
#   file_relpath : src/mediaconf/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for MediaConf.

Usage:
    Library code raises the narrow exceptions below; every failure that happens while a
    configuration document is being loaded reaches the caller as a single
    [`ConfigurationError`][mediaconf.errors.ConfigurationError], chained (``raise ... from``)
    to the lower-level cause.

Hierarchy:
    * `MediaconfError`
        * `ConfigurationError`
        * `MediaTypeError` (also a `ValueError`)
        * `ServiceResolutionError`
            * `UnknownServiceError`
            * `ServiceUnavailableError`
        * `TranslatorUnavailableError`
        * `ParseFailure`
"""

from __future__ import annotations


class MediaconfError(Exception):
    """Base class for all MediaConf errors."""


class ConfigurationError(MediaconfError):
    """A configuration could not be loaded.

    Raised for document structure errors (duplicate parent tags, malformed media types),
    resolution errors (unknown or inaccessible implementation names) and construction
    errors (an implementation failed to build, or a disallowed type was declared).
    The original failure, when there is one, is available as ``__cause__``.
    """

    def cause_chain(self) -> list[str]:
        """Return this error's message followed by the messages of its causes.

        Returns:
            list[str]: Messages, outermost first.
        """
        chain: list[str] = []
        seen: set[int] = set()
        exc: BaseException | None = self
        while exc is not None and id(exc) not in seen:
            seen.add(id(exc))
            text: str = str(exc) or exc.__class__.__name__
            chain.append(text if exc is self else f"{exc.__class__.__name__}: {text}")
            exc = exc.__cause__ or exc.__context__
        return chain


class MediaTypeError(MediaconfError, ValueError):
    """A media type string could not be parsed."""


class ServiceResolutionError(MediaconfError):
    """A declared implementation name could not be resolved to a class.

    Attributes:
        family (str): Name of the capability family that was searched.
        name (str): The declared implementation name.
    """

    def __init__(self, family: str, name: str, message: str) -> None:
        super().__init__(message)
        self.family = family
        self.name = name


class UnknownServiceError(ServiceResolutionError):
    """No implementation is registered under the declared name."""


class ServiceUnavailableError(ServiceResolutionError):
    """An implementation is registered but cannot be imported or used."""


class TranslatorUnavailableError(MediaconfError):
    """No translator is currently available."""


class ParseFailure(MediaconfError):
    """A parser failed while extracting content from a stream."""
