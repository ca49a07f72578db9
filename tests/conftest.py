"""Shared test fixtures for ramlgen.

Provides reusable fixtures for loading RAML fixtures, building generation
contexts, creating isolated config environments, managing output state, and
running CLI commands. These fixtures are automatically discovered by pytest
and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ramlgen.generator.context import GenerationContext
from ramlgen.generator.diagnostics import CollectingDiagnostics
from ramlgen.models import Configuration, RamlDocument
from ramlgen.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# RAML fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def users_raml() -> str:
    """Text of the users fixture (nested resources, enums, every param location)."""
    return (FIXTURES_DIR / "users.raml").read_text(encoding="utf-8")


@pytest.fixture
def users_document(users_raml: str) -> RamlDocument:
    """Parsed users fixture."""
    from ramlgen.parser import parse_raml

    return parse_raml(users_raml)


@pytest.fixture
def templates_raml() -> str:
    """Text of the fixture using traits and resource types."""
    return (FIXTURES_DIR / "templates.raml").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Generation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """An empty, writable output directory."""
    path = tmp_path / "generated"
    path.mkdir()
    return path


@pytest.fixture
def configuration(output_dir: Path) -> Configuration:
    """A valid configuration writing to ``output_dir``."""
    return Configuration(output_directory=output_dir, base_package_name="com.example.api")


@pytest.fixture
def diagnostics() -> CollectingDiagnostics:
    return CollectingDiagnostics()


@pytest.fixture
def context(configuration: Configuration, diagnostics: CollectingDiagnostics) -> GenerationContext:
    """A fresh generation context recording diagnostics."""
    return GenerationContext(configuration, diagnostics=diagnostics)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_DATA_HOME to a subdirectory of tmp_path so that crash logs
    never touch the real user directory. Clears all RAMLGEN_* environment
    variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "RAMLGEN_OUTPUT_DIR",
        "RAMLGEN_BASE_PACKAGE",
        "RAMLGEN_JSR303",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format OutputManager for tests that don't care about output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
