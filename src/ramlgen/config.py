"""Configuration management with precedence resolution and pre-flight checks.

This module handles all configuration for a ramlgen run:

* **Project config** -- an optional ``./ramlgen.json`` holding the fields of
  :class:`~ramlgen.models.Configuration`. Written by ``ramlgen init`` via
  :func:`save_project_config`.
* **Precedence resolution** -- :func:`resolve_configuration` merges CLI
  flags, environment variables, the project config and defaults into the
  effective :class:`~ramlgen.models.Configuration`.
* **Pre-flight validation** -- :func:`validate_configuration` rejects a
  configuration the generator cannot work with before any RAML is read.
* **Data directory** -- :func:`get_data_dir` (XDG-aware) receives crash logs.

File writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import re
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from ramlgen.exceptions import ConfigError
from ramlgen.models import Configuration

if TYPE_CHECKING:
    from ramlgen.generator.diagnostics import Diagnostics

_APP_NAME = "ramlgen"
_PROJECT_CONFIG_FILENAME = "ramlgen.json"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})

# A dotted sequence of Java identifiers, e.g. ``com.example.api``.
_PACKAGE_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*(\.[A-Za-z_$][A-Za-z0-9_$]*)*$")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/ramlgen/`` (default ``~/.local/share/ramlgen/``).
    On macOS/Windows: ``~/.ramlgen/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On any failure the temp file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project-local config ---


def _project_config_path() -> Path:
    """Path to the project-local config file in the working directory."""
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config(path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./ramlgen.json``.

    Args:
        path: Explicit config file path. Defaults to ``./ramlgen.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = path or _project_config_path()
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def save_project_config(configuration: Configuration, path: Optional[Path] = None) -> Path:
    """Persist *configuration* atomically as the project-local config.

    Args:
        configuration: The configuration to save.
        path: Explicit destination. Defaults to ``./ramlgen.json``.

    Returns:
        The path that was written.
    """
    path = path or _project_config_path()
    data = configuration.model_dump(mode="json", exclude_none=True)
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


# --- Precedence resolution ---


def resolve_configuration(
    cli_output_dir: Optional[str] = None,
    cli_base_package: Optional[str] = None,
    cli_jsr303: Optional[bool] = None,
    config_path: Optional[Path] = None,
) -> Configuration:
    """Resolve the effective configuration with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_output_dir``, ``cli_base_package``, ``cli_jsr303``)
        2. Environment variables (``RAMLGEN_OUTPUT_DIR``,
           ``RAMLGEN_BASE_PACKAGE``, ``RAMLGEN_JSR303``)
        3. Project config (``./ramlgen.json``)
        4. Defaults

    The result is not validated; see :func:`validate_configuration`.

    Raises:
        ConfigError: If the project config is malformed.
    """
    # 4 + 3. Defaults overlaid with the project file
    project = load_project_config(config_path) or {}
    try:
        configuration = Configuration.model_validate(project)
    except ValueError as exc:
        raise ConfigError(f"Invalid project config: {exc}") from exc

    # 2. Environment variables
    env_output_dir = os.environ.get("RAMLGEN_OUTPUT_DIR")
    if env_output_dir:
        configuration.output_directory = Path(env_output_dir)
    env_package = os.environ.get("RAMLGEN_BASE_PACKAGE")
    if env_package:
        configuration.base_package_name = env_package
    env_jsr303 = os.environ.get("RAMLGEN_JSR303")
    if env_jsr303:
        configuration.use_jsr303_annotations = env_jsr303.strip().lower() in _TRUE_VALUES

    # 1. CLI flags (highest precedence)
    if cli_output_dir is not None:
        configuration.output_directory = Path(cli_output_dir)
    if cli_base_package is not None:
        configuration.base_package_name = cli_base_package
    if cli_jsr303 is not None:
        configuration.use_jsr303_annotations = cli_jsr303

    return configuration


# --- Pre-flight validation ---


def validate_configuration(
    configuration: Optional[Configuration],
    diagnostics: Optional[Diagnostics] = None,
) -> Configuration:
    """Check that *configuration* is usable before any generation work.

    A non-empty output directory is accepted with a warning because
    pre-existing files may be overwritten or left stale.

    Args:
        configuration: The configuration to check.
        diagnostics: Sink for the non-empty directory warning. Defaults to
            :class:`~ramlgen.generator.diagnostics.OutputDiagnostics`.

    Returns:
        The same configuration, for chaining.

    Raises:
        ConfigError: If the configuration is missing, has no output
            directory, the output directory is not a writable pre-existing
            directory, or the base package name is empty or malformed.
    """
    from ramlgen.generator.diagnostics import OutputDiagnostics
    from ramlgen.generator.names import JAVA_KEYWORDS

    if configuration is None:
        raise ConfigError("configuration can't be null")

    output_directory = configuration.output_directory
    if output_directory is None:
        raise ConfigError("outputDirectory can't be null")
    if not output_directory.is_dir():
        raise ConfigError(f"{output_directory} is not a pre-existing directory")
    if not os.access(output_directory, os.W_OK):
        raise ConfigError(f"{output_directory} can't be written to")

    if any(output_directory.iterdir()):
        (diagnostics or OutputDiagnostics()).warning(
            f"Directory {output_directory} is not empty, generation will work but "
            "pre-existing files may remain and produce unexpected results"
        )

    package = configuration.base_package_name
    if not package.strip():
        raise ConfigError("base package name can't be empty")
    if not _PACKAGE_RE.match(package):
        raise ConfigError(f"'{package}' is not a valid Java package name")
    reserved = [segment for segment in package.split(".") if segment in JAVA_KEYWORDS]
    if reserved:
        raise ConfigError(
            f"'{package}' is not a valid Java package name "
            f"(reserved word: {', '.join(reserved)})"
        )

    return configuration
