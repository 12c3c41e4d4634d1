# topmark:header:start
#
#   project      : MediaConf
#   file         : options.py
#   file_relpath : src/mediaconf/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared Click options and parameter types for MediaConf commands."""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Generic, NoReturn, Protocol, TypeVar, cast

import click

from mediaconf.cli.errors import MediaconfUsageError

if TYPE_CHECKING:

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

E = TypeVar("E", bound=Enum)
F = TypeVar("F", bound=Callable[..., object])


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable, never colored).
    """

    DEFAULT = "default"
    JSON = "json"


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum (case-insensitive)."""
        if value is None or isinstance(value, self.enum_cls):
            return value
        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in self.enum_cls
        }
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]
        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Return the program-output verbosity level.

    Positive values add detail, negative values suppress output, 0 is the default.

    Raises:
        MediaconfUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise MediaconfUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count - quiet_count


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: str | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Disables color for JSON output, honors ``--color``/``--no-color``, then the
    ``FORCE_COLOR`` and ``NO_COLOR`` environment variables, and finally enables color
    only when stdout is a TTY.
    """
    if output_format and output_format.lower() == OutputFormat.JSON.value:
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        isatty: Callable[[], bool] | None = getattr(sys.stdout, "isatty", None)
        stdout_isatty = bool(isatty()) if isatty is not None else False
    return stdout_isatty


def common_verbose_options(f: F) -> F:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress non-essential output.",
    )(f)
    return f


def common_color_options(f: F) -> F:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def config_option(f: F) -> F:
    """Add an optional ``--config PATH`` option."""
    return click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Configuration document (defaults to $MEDIACONF_CONFIG or the built-in one).",
    )(f)


def output_format_option(f: F) -> F:
    """Add an ``--output-format`` option."""
    return click.option(
        "--output-format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=OutputFormat.DEFAULT.value,
        show_default=True,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
