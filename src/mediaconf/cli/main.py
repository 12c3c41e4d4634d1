# topmark:header:start
#
#   project      : MediaConf
#   file         : main.py
#   file_relpath : src/mediaconf/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf command-line entry point.

Group-level options (verbosity and color) are resolved once and stored in ``ctx.obj``;
subcommands read them back through [`mediaconf.cli.cmd_common`][mediaconf.cli.cmd_common].
Internal logging is configured from ``MEDIACONF_LOG_LEVEL``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mediaconf.cli.commands.check import check_command
from mediaconf.cli.commands.detect import detect_command, parse_command
from mediaconf.cli.commands.services import services_command
from mediaconf.cli.commands.show import show_command
from mediaconf.cli.commands.version import version_command
from mediaconf.cli.console import ClickConsole
from mediaconf.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from mediaconf.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from mediaconf.cli.console import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color``.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="MediaConf CLI",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the MediaConf CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'mediaconf check CONFIG' to validate a configuration.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(check_command)

cli.add_command(show_command)

cli.add_command(services_command)

cli.add_command(detect_command)

cli.add_command(parse_command)

if __name__ == "__main__":
    cli()
