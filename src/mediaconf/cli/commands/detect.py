# topmark:header:start
#
#   project      : MediaConf
#   file         : detect.py
#   file_relpath : src/mediaconf/cli/commands/detect.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf `detect` and `parse` commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mediaconf.cli.cmd_common import get_console, load_cli_config
from mediaconf.cli.errors import (
    MediaconfCliError,
    MediaconfFileNotFoundError,
    MediaconfIOError,
)
from mediaconf.cli.options import config_option
from mediaconf.constants import RESOURCE_NAME_KEY
from mediaconf.errors import ParseFailure

if TYPE_CHECKING:
    from mediaconf.cli.console import ConsoleLike
    from mediaconf.config.model import MediaConfig
    from mediaconf.mime.types import MediaType
    from mediaconf.parse.base import ParsedContent

file_argument = click.argument(
    "file_path",
    metavar="FILE",
    type=click.Path(dir_okay=False, path_type=Path),
)


def _check_exists(file_path: Path) -> None:
    if not file_path.exists():
        raise MediaconfFileNotFoundError(f"File not found: {file_path}")


@click.command(
    name="detect",
    help="Print the detected media type of a file.",
)
@config_option
@file_argument
def detect_command(*, file_path: Path, config_path: Path | None = None) -> None:
    """Detect the media type of ``FILE`` with the configured detector.

    Args:
        file_path (Path): File to classify.
        config_path (Path | None): Configuration document; the default when None.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    _check_exists(file_path)
    config: MediaConfig = load_cli_config(ctx, config_path)
    try:
        with file_path.open("rb") as fh:
            media_type: MediaType = config.detector.detect(
                fh, {RESOURCE_NAME_KEY: file_path.name}
            )
    except OSError as exc:
        raise MediaconfIOError(f"Unable to read {file_path}: {exc}") from exc
    console.print(str(media_type))


@click.command(
    name="parse",
    help="Detect the type of a file and print the text extracted by the configured parser.",
)
@config_option
@file_argument
def parse_command(*, file_path: Path, config_path: Path | None = None) -> None:
    """Parse ``FILE`` with an auto-detecting parser built from the configuration.

    Args:
        file_path (Path): File to parse.
        config_path (Path | None): Configuration document; the default when None.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    _check_exists(file_path)
    config: MediaConfig = load_cli_config(ctx, config_path)
    try:
        with file_path.open("rb") as fh:
            content: ParsedContent = config.auto_detect_parser().parse(
                fh, {RESOURCE_NAME_KEY: file_path.name}
            )
    except OSError as exc:
        raise MediaconfIOError(f"Unable to read {file_path}: {exc}") from exc
    except ParseFailure as exc:
        raise MediaconfCliError(f"Unable to parse {file_path}: {exc}") from exc
    console.print(content.text)
