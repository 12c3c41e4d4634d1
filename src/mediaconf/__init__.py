# topmark:header:start
#
#   project      : MediaConf
#   file         : __init__.py
#   file_relpath : src/mediaconf/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf package.

MediaConf builds a runtime graph of media type detectors, content parsers and a
translator from a declarative XML configuration document, resolving implementation
names through an explicit service registry.
"""

from __future__ import annotations
