# topmark:header:start
#
#   project      : MediaConf
#   file         : services.py
#   file_relpath : src/mediaconf/cli/commands/services.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf `services` command.

Lists the implementations registered with the service loader (packaged manifest,
``$MEDIACONF_SERVICES`` manifests and installed entry points).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from mediaconf.cli.cmd_common import config_error, get_console, get_effective_verbosity
from mediaconf.cli.options import EnumChoiceParam, OutputFormat, output_format_option
from mediaconf.config.environment import ConfigEnvironment
from mediaconf.errors import ConfigurationError
from mediaconf.services.loader import ServiceFamily

if TYPE_CHECKING:
    from mediaconf.cli.console import ConsoleLike
    from mediaconf.services.loader import ServiceLoader


@click.command(
    name="services",
    help="List registered detectors, parsers and translators.",
)
@click.option(
    "--family",
    "family",
    type=EnumChoiceParam(ServiceFamily),
    default=None,
    help=f"Only list one family ({', '.join(f.value for f in ServiceFamily)}).",
)
@output_format_option
def services_command(
    *,
    family: ServiceFamily | None = None,
    output_format: OutputFormat = OutputFormat.DEFAULT,
) -> None:
    """List the registered services.

    Args:
        family (ServiceFamily | None): Restrict the listing to one family.
        output_format (OutputFormat): Plain text or JSON.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    verbosity: int = get_effective_verbosity(ctx)

    try:
        loader: ServiceLoader = ConfigEnvironment.from_environ().service_loader()
    except ConfigurationError as exc:
        raise config_error(exc, verbosity) from exc

    families: list[ServiceFamily] = [family] if family is not None else list(ServiceFamily)
    payload: dict[str, list[dict[str, Any]]] = {
        f.value: [
            {
                "name": entry.name,
                "target": entry.target if isinstance(entry.target, str) else repr(entry.target),
                "auto": entry.auto,
                "origin": entry.origin,
            }
            for entry in loader.entries(f)
        ]
        for f in families
    }

    if output_format == OutputFormat.JSON:
        console.print(json.dumps(payload, indent=2))
        return

    for name, entries in payload.items():
        console.print(console.styled(f"{name}:", bold=True))
        for item in entries:
            marker: str = console.styled("*", fg="green") if item["auto"] else " "
            line: str = f"  {marker} {item['name']}"
            if verbosity > 0:
                line += f"  ({item['origin']})"
            console.print(line)
    if verbosity >= 0:
        console.print()
        console.print("* = used by the default detector/parser/translator")
