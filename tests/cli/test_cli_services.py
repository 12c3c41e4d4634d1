# topmark:header:start
#
#   project      : MediaConf
#   file         : test_cli_services.py
#   file_relpath : tests/cli/test_cli_services.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `mediaconf services`."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from mediaconf.cli.exit_codes import ExitCode
from mediaconf.constants import ENV_SERVICES
from tests.cli.conftest import assert_exit, assert_SUCCESS, run_cli, write_services
import pytest

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.cli


def test_services_lists_every_family() -> None:
    result = run_cli(["--no-color", "services"])
    assert_SUCCESS(result)
    for header in ("detectors:", "parsers:", "translators:"):
        assert header in result.output
    assert "  * mediaconf.parse.builtins.TextParser" in result.output
    assert "    mediaconf.parse.composite.CompositeParser" in result.output
    assert "* = used by the default detector/parser/translator" in result.output


def test_services_single_family_json() -> None:
    result = run_cli(["services", "--family", "translators", "--output-format", "json"])
    assert_SUCCESS(result)
    payload = json.loads(result.output)
    assert list(payload) == ["translators"]
    names = [entry["name"] for entry in payload["translators"]]
    assert "mediaconf.translate.base.EmptyTranslator" in names


def test_services_include_environment_manifests(tmp_path: Path) -> None:
    manifest = write_services(tmp_path)
    result = run_cli(
        ["-v", "--no-color", "services", "--family", "parsers"],
        env={ENV_SERVICES: str(manifest)},
    )
    assert_SUCCESS(result)
    assert f"com.example.LeafA  ({manifest})" in result.output


def test_services_missing_manifest(tmp_path: Path) -> None:
    result = run_cli(["services"], env={ENV_SERVICES: str(tmp_path / "absent.toml")})
    assert_exit(result, ExitCode.CONFIG_ERROR)
    assert "Unable to read service manifest" in result.output
