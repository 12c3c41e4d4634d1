# topmark:header:start
#
#   project      : MediaConf
#   file         : constants.py
#   file_relpath : src/mediaconf/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    MEDIACONF_VERSION: str = get_version("mediaconf")
except PackageNotFoundError:  # running from a source checkout
    MEDIACONF_VERSION = "0.0.0+unknown"

# Packaged resources
BUILTIN_TYPES_PACKAGE: Final[str] = "mediaconf.mime"
BUILTIN_TYPES_RESOURCE: Final[str] = "mediaconf-types.toml"
BUILTIN_SERVICES_PACKAGE: Final[str] = "mediaconf.services"
BUILTIN_SERVICES_RESOURCE: Final[str] = "mediaconf-services.toml"
PACKAGED_CONFIG_PACKAGE: Final[str] = "mediaconf.config"

# Environment variables
ENV_CONFIG: Final[str] = "MEDIACONF_CONFIG"
ENV_PATH: Final[str] = "MEDIACONF_PATH"
ENV_SERVICES: Final[str] = "MEDIACONF_SERVICES"
ENV_LOG_LEVEL: Final[str] = "MEDIACONF_LOG_LEVEL"

# Metadata keys
RESOURCE_NAME_KEY: Final[str] = "resourceName"
CONTENT_TYPE_KEY: Final[str] = "Content-Type"

# Configuration document tags and attributes
TAG_MIME_REPOSITORY: Final[str] = "mimeTypeRepository"
TAG_DETECTORS: Final[str] = "detectors"
TAG_DETECTOR: Final[str] = "detector"
TAG_PARSERS: Final[str] = "parsers"
TAG_PARSER: Final[str] = "parser"
TAG_TRANSLATOR: Final[str] = "translator"
TAG_MIME: Final[str] = "mime"
TAG_MIME_EXCLUDE: Final[str] = "mime-exclude"
EXCLUDE_SUFFIX: Final[str] = "-exclude"
ATTR_CLASS: Final[str] = "class"
ATTR_RESOURCE: Final[str] = "resource"
