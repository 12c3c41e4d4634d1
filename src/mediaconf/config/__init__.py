# topmark:header:start
#
#   project      : MediaConf
#   file         : __init__.py
#   file_relpath : src/mediaconf/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration loading for MediaConf.

Submodules:
    * `document`: XML document sources and element helpers.
    * `loader`: the generic composite loader.
    * `bindings`: detector and parser bindings for the loader.
    * `translator`: translator assembly.
    * `assembler`: full configuration loads from any document source.
    * `environment`: explicit environment and the default configuration.
    * `model`: the immutable `MediaConfig`.
    * `logging`: logging setup shared by the whole package.

This package's ``__init__`` stays import-light: the media type and service modules
import `mediaconf.config.logging`, so importing the assembler here would be circular.
"""
