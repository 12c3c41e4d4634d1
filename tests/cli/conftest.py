# topmark:header:start
#
#   project      : MediaConf
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers.

`run_cli()` invokes the Click group in-process with `click.testing.CliRunner`; the
assertion helpers print the captured output when an exit code does not match, which
keeps failures readable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from click.testing import CliRunner, Result

from mediaconf.cli.exit_codes import ExitCode
from mediaconf.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_SERVICES = """
[[parsers]]
name = "com.example.LeafA"
target = "tests.sample_services:LeafA"

[[parsers]]
name = "com.example.Exploding"
target = "tests.sample_services:ExplodingParser"
"""


def run_cli(argv: str | Sequence[str] | None, *, env: dict[str, str] | None = None) -> Result:
    """Invoke the CLI with ``argv``.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["check", "x.xml"]``.
        env (dict[str, str] | None): Extra environment variables for the invocation.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, env=env)


def assert_exit(result: Result, expected: ExitCode) -> None:
    """Assert the exit code of ``result``, showing the output on mismatch."""
    assert result.exit_code == expected, (
        f"expected {expected.name} ({int(expected)}), got {result.exit_code}\n"
        f"--- output ---\n{result.output}"
    )


def assert_SUCCESS(result: Result) -> None:  # noqa: N802
    """Assert that the command succeeded."""
    assert_exit(result, ExitCode.SUCCESS)


def write_config(tmp_path: Path, body: str, name: str = "mediaconf.xml") -> Path:
    """Write ``<properties>{body}</properties>`` to ``tmp_path / name``."""
    path: Path = tmp_path / name
    path.write_text(f"<properties>{body}</properties>", encoding="utf-8")
    return path


def write_services(tmp_path: Path) -> Path:
    """Write a manifest declaring the sample parsers used by the CLI tests."""
    path: Path = tmp_path / "services.toml"
    path.write_text(SAMPLE_SERVICES, encoding="utf-8")
    return path
