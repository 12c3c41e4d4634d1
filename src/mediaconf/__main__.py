# topmark:header:start
#
#   project      : MediaConf
#   file         : __main__.py
#   file_relpath : src/mediaconf/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running MediaConf via ``python -m mediaconf``.

Delegates to [`mediaconf.cli.main.cli`][mediaconf.cli.main.cli].
"""

from __future__ import annotations

from mediaconf.cli.main import cli

if __name__ == "__main__":
    cli()
