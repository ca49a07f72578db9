"""ramlgen -- Generate JAX-RS resource interfaces from RAML 0.8 descriptions.

This package reads a RAML API description and turns its resource tree into
Java source: one annotated interface per top-level resource, one method per
action, one annotated parameter per declared URI, header, or query parameter.

Typical workflow::

    ramlgen init --output-dir src/main/java --package com.example.api
    ramlgen generate api.raml

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for the description tree and the configuration.
    config: Project configuration, precedence resolution and pre-flight checks.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
