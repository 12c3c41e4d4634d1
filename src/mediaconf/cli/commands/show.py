# topmark:header:start
#
#   project      : MediaConf
#   file         : show.py
#   file_relpath : src/mediaconf/cli/commands/show.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf `show` command.

Prints the resolved detector, parser and translator trees of a configuration.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from mediaconf.cli.cmd_common import get_console, load_cli_config
from mediaconf.cli.options import OutputFormat, config_option, output_format_option
from mediaconf.config.describe import describe_config, render_tree

if TYPE_CHECKING:
    from pathlib import Path

    from mediaconf.cli.console import ConsoleLike
    from mediaconf.config.model import MediaConfig


@click.command(
    name="show",
    help="Show the resolved detector, parser and translator of a configuration.",
)
@config_option
@output_format_option
def show_command(
    *,
    config_path: Path | None = None,
    output_format: OutputFormat = OutputFormat.DEFAULT,
) -> None:
    """Show the resolved configuration.

    Args:
        config_path (Path | None): Configuration document; the default when None.
        output_format (OutputFormat): Tree text or JSON.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)

    config: MediaConfig = load_cli_config(ctx, config_path)
    payload: dict[str, Any] = describe_config(config)

    if output_format == OutputFormat.JSON:
        console.print(json.dumps(payload, indent=2))
        return

    console.print(console.styled(f"Configuration: {payload['source']}", bold=True))
    repository: dict[str, Any] = payload["mime_repository"]
    console.print(f"Media types: {repository['types']} (from {repository['source']})")
    for section in ("detector", "parser", "translator"):
        console.print()
        console.print(console.styled(section.capitalize(), underline=True))
        for line in render_tree(payload[section]):
            console.print(line)
