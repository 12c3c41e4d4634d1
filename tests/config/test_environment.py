# topmark:header:start
#
#   project      : MediaConf
#   file         : test_environment.py
#   file_relpath : tests/config/test_environment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for locating the default configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mediaconf.config.environment import ConfigEnvironment, default_config, get_default_config
from mediaconf.constants import ENV_CONFIG, ENV_PATH, ENV_SERVICES
from mediaconf.detect.default import DefaultDetector
from mediaconf.errors import ConfigurationError
from mediaconf.parse.composite import CompositeParser
from mediaconf.parse.default import DefaultParser

DOCUMENT = """<properties>
  <parsers><parser class="mediaconf.parse.builtins.TextParser"/></parsers>
</properties>
"""

MANIFEST = """
[[translators]]
name = "com.example.Upper"
target = "tests.sample_services:UpperTranslator"
"""


def _env(**kwargs: object) -> ConfigEnvironment:
    return ConfigEnvironment(use_entry_points=False, **kwargs)  # type: ignore[arg-type]


def test_from_environ_reads_every_variable(tmp_path: Path) -> None:
    environ = {
        ENV_CONFIG: "  custom.xml ",
        ENV_PATH: os.pathsep.join([str(tmp_path / "a"), "", str(tmp_path / "b")]),
        ENV_SERVICES: str(tmp_path / "services.toml"),
    }
    env = ConfigEnvironment.from_environ(environ)
    assert env.config_location == "custom.xml"
    assert env.search_paths == (tmp_path / "a", tmp_path / "b")
    assert env.service_manifests == (tmp_path / "services.toml",)
    assert env.use_entry_points


def test_from_environ_blank_location_means_builtin() -> None:
    assert ConfigEnvironment.from_environ({ENV_CONFIG: "   "}).config_location is None


def test_no_location_gives_the_builtin_configuration() -> None:
    config = default_config(_env())
    assert config.source == "<builtin>"
    assert isinstance(config.detector, DefaultDetector)
    assert isinstance(config.parser, DefaultParser)


def test_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "config.xml"
    path.write_text(DOCUMENT, encoding="utf-8")
    config = default_config(_env(config_location=str(path)))
    assert config.source == str(path)
    assert type(config.parser) is CompositeParser


def test_url_location(tmp_path: Path) -> None:
    path = tmp_path / "config.xml"
    path.write_text(DOCUMENT, encoding="utf-8")
    config = default_config(_env(config_location=path.as_uri()))
    assert config.source == path.as_uri()


def test_search_paths_in_order(tmp_path: Path) -> None:
    first, second = tmp_path / "first", tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (second / "mine.xml").write_text(DOCUMENT, encoding="utf-8")
    config = default_config(_env(config_location="mine.xml", search_paths=(first, second)))
    assert config.source == str(second / "mine.xml")


def test_packaged_configuration_resource() -> None:
    config = default_config(_env(config_location="mediaconf-config.xml"))
    assert config.source == "mediaconf-config.xml"
    assert isinstance(config.parser, DefaultParser)
    assert isinstance(config.detector, DefaultDetector)


def test_missing_location() -> None:
    with pytest.raises(ConfigurationError, match="Specified configuration not found: nowhere.xml"):
        default_config(_env(config_location="nowhere.xml"))


def test_extra_service_manifests(tmp_path: Path) -> None:
    manifest = tmp_path / "services.toml"
    manifest.write_text(MANIFEST, encoding="utf-8")
    document = tmp_path / "config.xml"
    document.write_text(
        '<properties><translator class="com.example.Upper"/></properties>', encoding="utf-8"
    )
    config = default_config(
        _env(config_location=str(document), service_manifests=(manifest,))
    )
    assert config.translator.translate("abc", "fr") == "ABC"


def test_get_default_config_reads_the_process_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "env.xml").write_text(DOCUMENT, encoding="utf-8")
    monkeypatch.setenv(ENV_CONFIG, "env.xml")
    monkeypatch.setenv(ENV_PATH, str(tmp_path))
    first = get_default_config()
    second = get_default_config()
    assert first.source == str(tmp_path / "env.xml")
    assert first is not second


def test_get_default_config_propagates_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_CONFIG, "missing-config.xml")
    with pytest.raises(ConfigurationError):
        get_default_config()
