# topmark:header:start
#
#   project      : MediaConf
#   file         : errors.py
#   file_relpath : src/mediaconf/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the MediaConf CLI.

Raise these from commands to exit with a standardized message and exit code. They
prefer the project console (``ctx.obj["console"]``) for display and fall back to
Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from mediaconf.cli.exit_codes import ExitCode


class MediaconfCliError(click.ClickException):
    """Base class for all MediaConf CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        ctx: click.Context | None = click.get_current_context(silent=True)
        obj: Any = getattr(ctx, "obj", None)
        console: Any = obj.get("console") if isinstance(obj, dict) else None
        if console is not None:
            console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
            return
        super().show(file)


class MediaconfUsageError(MediaconfCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class MediaconfConfigError(MediaconfCliError):
    """Error for invalid configuration documents, repositories or manifests."""

    exit_code = ExitCode.CONFIG_ERROR


class MediaconfFileNotFoundError(MediaconfCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class MediaconfIOError(MediaconfCliError):
    """Error for I/O errors reading files."""

    exit_code = ExitCode.IO_ERROR
