# topmark:header:start
#
#   project      : MediaConf
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MediaConf project automation via Nox.

Sessions:
  - `lint`: Ruff static analysis.
  - `lint_fixall`: Ruff lint autofix.
  - `format_check`: Verify formatting (ruff).
  - `format`: Apply formatting (ruff).
  - `qa`: Per-Python session that runs pytest and pyright.
  - `property_test`: Long-running property tests (opt-in).
  - `package_check`: Build sdist/wheel and validate metadata (twine).

Notes:
  - The venv backend is `uv` when available, `virtualenv` otherwise.
  - Supported Python versions come from the `pyproject.toml` classifiers.

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
  - `nox -s property_test`
"""

from __future__ import annotations

import pathlib
import sys
import warnings
from typing import TYPE_CHECKING, Any, cast

import nox

if TYPE_CHECKING:
    from collections.abc import Callable

if sys.version_info >= (3, 11):
    import tomllib

    _toml_loads = cast("Callable[[str], dict[str, Any]]", tomllib.loads)
else:
    import tomlkit

    def _toml_loads(text: str) -> dict[str, Any]:
        return tomlkit.parse(text).unwrap()


CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

# pytest marker expression for the default (fast) run
FAST_MARKERS: str = "not hypothesis_slow"


def _parse_pyproject_toml() -> dict[str, Any]:
    """Parse `pyproject.toml`; runs at noxfile import time.

    Returns:
        dict[str, Any]: Parsed TOML document (empty when missing or malformed).
    """
    path: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"
    if not path.exists():
        return {}
    try:
        return _toml_loads(path.read_text(encoding="utf-8"))
    except Exception:
        warnings.warn("Could not parse pyproject.toml", RuntimeWarning, stacklevel=2)
        return {}


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    project: Any = _parse_pyproject_toml().get("project")
    classifiers: Any = project.get("classifiers") if isinstance(project, dict) else None
    if not isinstance(classifiers, list):
        warnings.warn(
            f"No classifiers in pyproject.toml. Falling back to Python {CURRENT_PYTHON_VERSION}.",
            RuntimeWarning,
            stacklevel=2,
        )
        return [CURRENT_PYTHON_VERSION]

    prefix = "Programming Language :: Python :: "
    versions: set[tuple[int, int]] = set()
    for c in cast("list[str]", classifiers):
        if not c.startswith(prefix):
            continue
        parts: list[str] = c.removeprefix(prefix).strip().split(".")
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.add((int(parts[0]), int(parts[1])))

    if not versions:
        return [CURRENT_PYTHON_VERSION]
    return [f"{major}.{minor}" for major, minor in sorted(versions)]


PYTHONS: list[str] = get_supported_pythons()

nox.options.sessions = ["lint", "format_check"]
nox.options.default_venv_backend = "uv|virtualenv"


def _install_dev(session: nox.Session) -> None:
    session.install("-e", ".[test,dev]")


@nox.session
def lint(session: nox.Session) -> None:
    """Static analysis."""
    _install_dev(session)
    session.run("ruff", "check", ".")


@nox.session
def lint_fixall(session: nox.Session) -> None:
    """Run ruff with --fix (auto-fix lint issues)."""
    _install_dev(session)
    session.run("ruff", "check", "--fix", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Check code formatting."""
    _install_dev(session)
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Format code (auto-fix)."""
    _install_dev(session)
    session.run("ruff", "format", ".")


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.log("Supported Python versions: " + ", ".join(PYTHONS))
    _install_dev(session)

    session.run("pytest", "-q", "tests", "-m", FAST_MARKERS, *session.posargs)

    py_ver = session.python
    if not isinstance(py_ver, str) or not py_ver:
        raise RuntimeError(f"Unexpected session.python value: {py_ver!r}")
    session.run("pyright", "--pythonversion", py_ver)


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the property tests of the configuration loader (developer only)."""
    _install_dev(session)
    session.run("pytest", "-vv", "tests", "-m", "hypothesis_slow", *session.posargs)


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate distribution metadata (twine)."""
    session.install("build", "twine")
    session.run(
        "python",
        "-c",
        "import shutil; shutil.rmtree('dist', ignore_errors=True)",
    )
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")
