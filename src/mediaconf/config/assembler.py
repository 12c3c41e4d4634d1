# topmark:header:start
#
#   project      : MediaConf
#   file         : assembler.py
#   file_relpath : src/mediaconf/config/assembler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration assembler.

Drives a full load: type repository first, then the detector and parser through the
generic composite loader, then the translator. Every document source (element, text,
stream, file, URL) ends up in [`load_config`][mediaconf.config.assembler.load_config].

Usage:
    ```python
    from pathlib import Path
    from mediaconf.config.assembler import load_config_file

    config = load_config_file(Path("mediaconf-config.xml"))
    print(config.parser)
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING

from mediaconf.config.bindings import DetectorBinding, ParserBinding
from mediaconf.config.document import first_child, parse_file, parse_stream, parse_text, parse_url
from mediaconf.config.loader import load_overall
from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.config.model import MediaConfig
from mediaconf.config.translator import load_translator
from mediaconf.constants import ATTR_RESOURCE, TAG_MIME_REPOSITORY
from mediaconf.detect.default import DefaultDetector
from mediaconf.errors import ConfigurationError
from mediaconf.mime.repository import MimeRepository, get_builtin_repository
from mediaconf.parse.default import DefaultParser
from mediaconf.services.loader import ServiceLoader
from mediaconf.translate.base import DefaultTranslator

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from mediaconf.detect.base import Detector
    from mediaconf.parse.base import Parser
    from mediaconf.translate.base import Translator

logger: MediaconfLogger = get_logger(__name__)


def load_repository(root: ET.Element, base_dir: Path | None = None) -> MimeRepository:
    """Return the repository named by ``<mimeTypeRepository>``, or the built-in one.

    Raises:
        ConfigurationError: If the element has no ``resource`` or it cannot be loaded.
    """
    element: ET.Element | None = first_child(root, TAG_MIME_REPOSITORY)
    if element is None:
        return get_builtin_repository()
    resource: str = (element.get(ATTR_RESOURCE) or "").strip()
    if not resource:
        raise ConfigurationError(
            f"Missing {ATTR_RESOURCE} attribute in <{TAG_MIME_REPOSITORY}> element"
        )
    return MimeRepository.load_resource(resource, base_dir=base_dir)


def load_config(
    root: ET.Element,
    loader: ServiceLoader | None = None,
    *,
    base_dir: Path | None = None,
    source: str = "<element>",
) -> MediaConfig:
    """Assemble a configuration from a parsed root element.

    Args:
        root (ET.Element): Configuration root element.
        loader (ServiceLoader | None): Resolves ``class`` names; the packaged manifest
            when None.
        base_dir (Path | None): Directory used to resolve relative resources.
        source (str): Label recorded on the result.

    Returns:
        MediaConfig: The resolved configuration.

    Raises:
        ConfigurationError: If any part of the configuration is invalid.
    """
    services: ServiceLoader = loader if loader is not None else ServiceLoader.builtin()
    logger.debug("Assembling configuration from %s", source)

    repository: MimeRepository = load_repository(root, base_dir)
    detector: Detector = load_overall(root, DetectorBinding(), repository, services)
    parser: Parser = load_overall(root, ParserBinding(), repository, services)
    translator: Translator = load_translator(root, services)

    logger.trace("Detector: %r", detector)
    logger.trace("Parser: %r", parser)
    logger.trace("Translator: %r", translator)
    return MediaConfig(
        mime_repository=repository,
        detector=detector,
        parser=parser,
        translator=translator,
        source=source,
    )


def load_config_text(
    text: str,
    loader: ServiceLoader | None = None,
    *,
    base_dir: Path | None = None,
    source: str = "<string>",
) -> MediaConfig:
    """Assemble a configuration from XML text."""
    return load_config(parse_text(text, source=source), loader, base_dir=base_dir, source=source)


def load_config_stream(
    stream: IO[bytes],
    loader: ServiceLoader | None = None,
    *,
    base_dir: Path | None = None,
    source: str = "<stream>",
) -> MediaConfig:
    """Assemble a configuration from a binary stream."""
    root: ET.Element = parse_stream(stream, source=source)
    return load_config(root, loader, base_dir=base_dir, source=source)


def load_config_file(path: Path | str, loader: ServiceLoader | None = None) -> MediaConfig:
    """Assemble a configuration from a file; relative resources resolve next to it."""
    file_path: Path = Path(path)
    return load_config(
        parse_file(file_path),
        loader,
        base_dir=file_path.resolve().parent,
        source=str(file_path),
    )


def load_config_url(url: str, loader: ServiceLoader | None = None) -> MediaConfig:
    """Assemble a configuration from a URL."""
    return load_config(parse_url(url), loader, source=url)


def builtin_config(loader: ServiceLoader | None = None) -> MediaConfig:
    """Return the built-in configuration.

    Uses the built-in repository together with the default detector, parser and
    translator discovered through ``loader``.
    """
    services: ServiceLoader = loader if loader is not None else ServiceLoader.builtin()
    repository: MimeRepository = get_builtin_repository()
    return MediaConfig(
        mime_repository=repository,
        detector=DefaultDetector(repository, services),
        parser=DefaultParser(repository.registry, services),
        translator=DefaultTranslator(services),
        source="<builtin>",
    )
