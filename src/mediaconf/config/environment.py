# topmark:header:start
#
#   project      : MediaConf
#   file         : environment.py
#   file_relpath : src/mediaconf/config/environment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Explicit environment for building the default configuration.

Instead of reading the process environment deep inside the loader, callers describe
where configuration comes from with a
[`ConfigEnvironment`][mediaconf.config.environment.ConfigEnvironment] and pass it to
[`default_config`][mediaconf.config.environment.default_config].
[`get_default_config`][mediaconf.config.environment.get_default_config] is the
convenience wrapper reading ``os.environ``; it builds a fresh configuration on every
call.

Environment variables:
    * ``MEDIACONF_CONFIG``: configuration location (file, URL, name on the search
      path, or packaged resource of ``mediaconf.config``).
    * ``MEDIACONF_PATH``: ``os.pathsep``-separated directories searched for a
      relative ``MEDIACONF_CONFIG``.
    * ``MEDIACONF_SERVICES``: ``os.pathsep``-separated extra service manifests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Mapping
from urllib.parse import urlparse

from mediaconf.config.assembler import (
    builtin_config,
    load_config_file,
    load_config_text,
    load_config_url,
)
from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import ENV_CONFIG, ENV_PATH, ENV_SERVICES, PACKAGED_CONFIG_PACKAGE
from mediaconf.errors import ConfigurationError
from mediaconf.services.loader import ServiceLoader

if TYPE_CHECKING:
    from mediaconf.config.model import MediaConfig

logger: MediaconfLogger = get_logger(__name__)

URL_SCHEMES: frozenset[str] = frozenset({"http", "https", "file", "ftp"})


def _split_paths(value: str | None) -> tuple[Path, ...]:
    if not value:
        return ()
    return tuple(Path(p) for p in value.split(os.pathsep) if p.strip())


@dataclass(frozen=True)
class ConfigEnvironment:
    """Where the default configuration comes from.

    Attributes:
        config_location (str | None): Configuration file, URL or resource name; the
            built-in configuration when None.
        search_paths (tuple[Path, ...]): Directories searched for a relative location.
        service_manifests (tuple[Path, ...]): Extra service manifests.
        use_entry_points (bool): Whether installed entry points are scanned.
    """

    config_location: str | None = None
    search_paths: tuple[Path, ...] = ()
    service_manifests: tuple[Path, ...] = ()
    use_entry_points: bool = True

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> ConfigEnvironment:
        """Read ``MEDIACONF_CONFIG``, ``MEDIACONF_PATH`` and ``MEDIACONF_SERVICES``."""
        env: Mapping[str, str] = os.environ if environ is None else environ
        location: str | None = (env.get(ENV_CONFIG) or "").strip() or None
        return cls(
            config_location=location,
            search_paths=_split_paths(env.get(ENV_PATH)),
            service_manifests=_split_paths(env.get(ENV_SERVICES)),
        )

    def service_loader(self) -> ServiceLoader:
        """Build the service loader described by this environment."""
        return ServiceLoader.from_manifests(
            self.service_manifests, use_entry_points=self.use_entry_points
        )


def default_config(environment: ConfigEnvironment | None = None) -> MediaConfig:
    """Build the configuration described by ``environment``.

    The location is tried as an existing file, then as a URL, then as a name in each
    search path, then as a packaged resource of ``mediaconf.config``.

    Args:
        environment (ConfigEnvironment | None): Explicit environment; an empty one
            (built-in configuration) when None.

    Returns:
        MediaConfig: A newly built configuration.

    Raises:
        ConfigurationError: If the location cannot be found or the document is invalid.
    """
    env: ConfigEnvironment = environment if environment is not None else ConfigEnvironment()
    loader: ServiceLoader = env.service_loader()
    location: str | None = env.config_location
    if location is None:
        logger.debug("No configuration location; using the built-in configuration")
        return builtin_config(loader)

    candidate = Path(location)
    if candidate.is_file():
        return load_config_file(candidate, loader)

    if urlparse(location).scheme.lower() in URL_SCHEMES:
        return load_config_url(location, loader)

    for directory in env.search_paths:
        path: Path = directory / location
        if path.is_file():
            logger.debug("Found %s on the search path: %s", location, path)
            return load_config_file(path, loader)

    packaged = files(PACKAGED_CONFIG_PACKAGE).joinpath(location)
    if packaged.is_file():
        logger.debug("Using packaged configuration %s", location)
        return load_config_text(packaged.read_text(encoding="utf-8"), loader, source=location)

    raise ConfigurationError(f"Specified configuration not found: {location}")


def get_default_config() -> MediaConfig:
    """Build the default configuration from ``os.environ`` (not cached)."""
    return default_config(ConfigEnvironment.from_environ())
