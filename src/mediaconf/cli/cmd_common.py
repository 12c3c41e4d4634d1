# topmark:header:start
#
#   project      : MediaConf
#   file         : cmd_common.py
#   file_relpath : src/mediaconf/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by MediaConf CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mediaconf.cli.errors import MediaconfConfigError, MediaconfFileNotFoundError
from mediaconf.config.assembler import load_config_file
from mediaconf.config.environment import ConfigEnvironment, default_config
from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

    from mediaconf.cli.console import ConsoleLike
    from mediaconf.config.model import MediaConfig

logger: MediaconfLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the Click context by the root group."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (0 when unset)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", 0))


def config_error(exc: ConfigurationError, verbosity: int) -> MediaconfConfigError:
    """Translate a configuration failure into a CLI error.

    With ``-v`` the full cause chain is included, one cause per line.
    """
    if verbosity > 0:
        return MediaconfConfigError("\n  caused by: ".join(exc.cause_chain()))
    return MediaconfConfigError(str(exc))


def load_cli_config(ctx: click.Context, config_path: Path | None) -> MediaConfig:
    """Load the configuration selected on the command line.

    Args:
        ctx (click.Context): Current Click context.
        config_path (Path | None): Explicit document; the environment's default when None.

    Returns:
        MediaConfig: The resolved configuration.

    Raises:
        MediaconfFileNotFoundError: If ``config_path`` does not exist.
        MediaconfConfigError: If the configuration is invalid.
    """
    verbosity: int = get_effective_verbosity(ctx)
    environment: ConfigEnvironment = ConfigEnvironment.from_environ()
    if config_path is not None and not config_path.exists():
        raise MediaconfFileNotFoundError(f"Configuration file not found: {config_path}")
    try:
        if config_path is None:
            return default_config(environment)
        return load_config_file(config_path, environment.service_loader())
    except ConfigurationError as exc:
        logger.debug("Configuration load failed", exc_info=True)
        raise config_error(exc, verbosity) from exc
