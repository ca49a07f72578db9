"""Init command -- write a project-local ``ramlgen.json``.

Implements the ``ramlgen init`` top-level command. It records the output
directory, base package and JSR-303 toggle so that later ``ramlgen
generate`` runs only need the RAML source.
"""

from __future__ import annotations

from pathlib import Path

import typer

from ramlgen.output import error, info, success, suggest


def init_command(
    output_dir: str = typer.Option(
        ..., "--output-dir", "-d", help="Directory receiving the generated sources."
    ),
    package: str = typer.Option(
        ..., "--package", "-p", help="Base Java package, e.g. com.example.api."
    ),
    jsr303: bool = typer.Option(
        False, "--jsr303/--no-jsr303", help="Emit Bean Validation constraints."
    ),
    create_dir: bool = typer.Option(
        False, "--create-dir", help="Create the output directory if it is missing."
    ),
) -> None:
    """Initialise ``./ramlgen.json`` for this project.

    The settings are checked the same way ``generate`` checks them, so a
    saved configuration is known to be usable.

    Raises:
        typer.Exit: With the error's exit code if the settings are invalid.

    Example::

        ramlgen init --output-dir src/main/java --package com.example.api
    """
    from ramlgen.config import save_project_config, validate_configuration
    from ramlgen.exceptions import ConfigError
    from ramlgen.models import Configuration

    configuration = Configuration(
        output_directory=Path(output_dir),
        base_package_name=package,
        use_jsr303_annotations=jsr303,
    )

    if create_dir and not Path(output_dir).exists():
        Path(output_dir).mkdir(parents=True)
        info(f"Created {output_dir}")

    try:
        validate_configuration(configuration)
    except ConfigError as exc:
        error(str(exc))
        if not Path(output_dir).exists():
            suggest("Pass --create-dir to create the output directory.")
        raise typer.Exit(code=exc.exit_code) from None

    path = save_project_config(configuration)
    success(f"Configuration written to {path}")
    suggest("Generate sources: ramlgen generate <file.raml>")
