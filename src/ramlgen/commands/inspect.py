"""Inspect commands -- examine a RAML document and what it would generate.

Provides the ``ramlgen inspect`` sub-command group with read-only commands.
Nothing is written to disk:

* ``inspect info`` -- title, version, base URI and resource counts.
* ``inspect resources`` -- the interfaces and methods ``generate`` would
  produce, built in memory.
"""

from __future__ import annotations

import typer

from ramlgen.output import error, format_response, get_output

inspect_app = typer.Typer(no_args_is_help=True)

_DEFAULT_PACKAGE = "api"


def _load_document(source: str):  # noqa: ANN202
    """Load and parse the RAML document at *source*.

    Raises:
        typer.Exit: With the error's exit code when the document cannot
            be loaded or parsed.
    """
    from ramlgen.exceptions import RamlgenError
    from ramlgen.parser import load_raml, parse_raml

    try:
        return parse_raml(load_raml(source))
    except RamlgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _count(resources) -> tuple[int, int]:  # noqa: ANN001
    """Return ``(resources, actions)`` in a resource subtree."""
    resource_count = action_count = 0
    for resource in resources.values():
        nested_resources, nested_actions = _count(resource.resources)
        resource_count += 1 + nested_resources
        action_count += len(resource.actions) + nested_actions
    return resource_count, action_count


@inspect_app.command("info")
def inspect_info(
    raml: str = typer.Argument(..., help="RAML file path, URL, or '-' for stdin."),
) -> None:
    """Show general information about a RAML document.

    Example::

        ramlgen inspect info api.raml
    """
    document = _load_document(raml)
    resource_count, action_count = _count(document.resources)
    format_response({
        "title": document.title,
        "version": document.version or "",
        "base_uri": document.base_uri or "",
        "media_type": document.media_type or "",
        "top_level_resources": len(document.resources),
        "resources": resource_count,
        "actions": action_count,
    })


@inspect_app.command("resources")
def inspect_resources(
    raml: str = typer.Argument(..., help="RAML file path, URL, or '-' for stdin."),
    package: str = typer.Option(
        _DEFAULT_PACKAGE, "--package", "-p", help="Base Java package used for naming."
    ),
) -> None:
    """List the interfaces and methods that would be generated.

    Builds the class model in memory and shows one row per method with its
    HTTP verb, path and parameters.

    Example::

        ramlgen inspect resources api.raml
        ramlgen --json inspect resources api.raml
    """
    from ramlgen.exceptions import RamlgenError
    from ramlgen.generator.runner import build_code_model
    from ramlgen.models import Configuration

    document = _load_document(raml)
    try:
        code_model = build_code_model(document, Configuration(base_package_name=package))
    except RamlgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Interface", "Method", "Verb", "Path", "Parameters"]
    rows: list[list[str]] = []
    for interface in code_model.describe():
        if interface["kind"] != "interface":
            continue
        base_path = _path_value(interface["annotations"])
        for method in interface["methods"]:
            method_path = _path_value(method["annotations"])
            rows.append([
                interface["name"].rpartition(".")[2],
                method["name"],
                _verb(method["annotations"]),
                "/" + "/".join(p for p in (base_path, method_path) if p),
                ", ".join(p["name"] for p in method["params"]) or "-",
            ])

    get_output().print_table(
        headers, rows, title=f"{document.title} -- Methods ({len(rows)})"
    )


def _path_value(annotations: list[dict]) -> str:
    for annotation in annotations:
        if annotation["type"] == "javax.ws.rs.Path":
            return str(annotation["params"].get("value", ""))
    return ""


def _verb(annotations: list[dict]) -> str:
    """Simple name of the HTTP method annotation (the first one)."""
    return annotations[0]["type"].rpartition(".")[2] if annotations else "-"
