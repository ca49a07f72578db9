"""Generate command -- write JAX-RS resource interfaces for a RAML document.

Implements the ``ramlgen generate`` top-level command. The configuration is
resolved from CLI flags, ``RAMLGEN_*`` environment variables and the
project-local ``ramlgen.json`` (see :func:`~ramlgen.config.resolve_configuration`),
checked, and handed to :func:`~ramlgen.generator.runner.run` together with
the RAML source.
"""

from __future__ import annotations

from typing import Optional

import typer

from ramlgen.output import error, format_response, get_output, success, suggest


def generate_command(
    raml: str = typer.Argument(
        ..., help="RAML file path, URL, or '-' for stdin."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-d", help="Pre-existing directory receiving the sources."
    ),
    package: Optional[str] = typer.Option(
        None, "--package", "-p", help="Base Java package, e.g. com.example.api."
    ),
    jsr303: Optional[bool] = typer.Option(
        None, "--jsr303/--no-jsr303", help="Emit Bean Validation constraints."
    ),
) -> None:
    """Generate JAX-RS resource interfaces from a RAML 0.8 document.

    One interface is written per top-level resource, in the ``resource``
    sub-package of the base package. Every generated file path is printed
    to stdout.

    Raises:
        typer.Exit: With the error's exit code when the configuration is
            invalid, the RAML cannot be parsed, or the class model cannot
            be built.

    Example::

        ramlgen generate api.raml -d src/main/java -p com.example.api
        ramlgen --json generate https://example.com/api.raml --jsr303
    """
    from ramlgen.config import resolve_configuration
    from ramlgen.exceptions import RamlgenError
    from ramlgen.generator.runner import run
    from ramlgen.output import OutputFormat

    try:
        configuration = resolve_configuration(
            cli_output_dir=output_dir,
            cli_base_package=package,
            cli_jsr303=jsr303,
        )
        paths = run(raml, configuration)
    except RamlgenError as exc:
        error(str(exc))
        if _needs_init(exc):
            suggest("Create a project config: ramlgen init --output-dir DIR --package PKG")
        raise typer.Exit(code=exc.exit_code) from None

    if get_output().format == OutputFormat.JSON:
        format_response({
            "output_directory": str(configuration.output_directory),
            "files": [str(path) for path in paths],
        })
    else:
        for path in paths:
            get_output().print_data(str(path))
    success(f"Generated {len(paths)} file(s) in {configuration.output_directory}")


def _needs_init(exc: Exception) -> bool:
    """Whether *exc* is a missing-setting error ``ramlgen init`` would fix."""
    from ramlgen.exceptions import ConfigError

    message = str(exc)
    return isinstance(exc, ConfigError) and (
        message == "outputDirectory can't be null"
        or message == "base package name can't be empty"
    )
