# topmark:header:start
#
#   project      : MediaConf
#   file         : version.py
#   file_relpath : src/mediaconf/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf `version` command.

Prints the MediaConf version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from mediaconf.cli.cmd_common import get_console, get_effective_verbosity
from mediaconf.cli.options import OutputFormat, output_format_option
from mediaconf.constants import MEDIACONF_VERSION

if TYPE_CHECKING:
    from mediaconf.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of MediaConf.",
)
@output_format_option
def version_command(*, output_format: OutputFormat = OutputFormat.DEFAULT) -> None:
    """Show the current version of MediaConf.

    Args:
        output_format (OutputFormat): Plain text or JSON.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)

    if output_format == OutputFormat.JSON:
        console.print(json.dumps({"version": MEDIACONF_VERSION}))
    elif get_effective_verbosity(ctx) > 0:
        console.print(console.styled("MediaConf version:", bold=True, underline=True))
        console.print(f"    {console.styled(MEDIACONF_VERSION, bold=True)}")
    else:
        console.print(console.styled(MEDIACONF_VERSION, bold=True))
