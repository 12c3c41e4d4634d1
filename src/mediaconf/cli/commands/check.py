# topmark:header:start
#
#   project      : MediaConf
#   file         : check.py
#   file_relpath : src/mediaconf/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf `check` command.

Loads a configuration document and reports whether it is valid. Invalid documents exit
with ``CONFIG_ERROR`` (78); add ``-v`` to see the full cause chain.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mediaconf.cli.cmd_common import get_console, get_effective_verbosity, load_cli_config
from mediaconf.config.describe import qualified_name

if TYPE_CHECKING:
    from mediaconf.cli.console import ConsoleLike
    from mediaconf.config.model import MediaConfig


@click.command(
    name="check",
    help="Validate a configuration document.",
)
@click.argument(
    "config_path",
    metavar="CONFIG",
    type=click.Path(dir_okay=False, path_type=Path),
)
def check_command(*, config_path: Path) -> None:
    """Load ``CONFIG`` and print a short summary when it is valid.

    Args:
        config_path (Path): Configuration document to validate.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    verbosity: int = get_effective_verbosity(ctx)

    config: MediaConfig = load_cli_config(ctx, config_path)

    if verbosity < 0:
        return
    console.print(f"{console.styled('OK', fg='green', bold=True)}: {config.source}")
    if verbosity > 0:
        console.print(f"  types      : {len(config.media_type_registry)}")
        console.print(f"  detector   : {qualified_name(config.detector)}")
        console.print(f"  parser     : {qualified_name(config.parser)}")
        console.print(f"  translator : {qualified_name(config.translator)}")
