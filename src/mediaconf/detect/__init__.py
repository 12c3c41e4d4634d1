# topmark:header:start
#
#   project      : MediaConf
#   file         : __init__.py
#   file_relpath : src/mediaconf/detect/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detector capability: leaf detectors, the composite and the default."""
