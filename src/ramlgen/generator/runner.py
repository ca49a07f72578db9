"""End-to-end generation pipeline.

:func:`run` goes from a RAML source (path, URL or ``-``) to written files;
:func:`run_document` starts from an already parsed
:class:`~ramlgen.models.RamlDocument`. Both validate the configuration
before any other work so that a bad output directory never costs a
download or a parse.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ramlgen.codemodel.model import CodeModel
from ramlgen.config import validate_configuration
from ramlgen.generator.builder import generate
from ramlgen.generator.context import GenerationContext
from ramlgen.generator.diagnostics import Diagnostics, OutputDiagnostics
from ramlgen.models import Configuration, RamlDocument


def run(
    source: str,
    configuration: Configuration,
    diagnostics: Optional[Diagnostics] = None,
) -> list[Path]:
    """Load, validate and parse *source*, then generate its interfaces.

    Returns:
        Paths of the written ``.java`` files.

    Raises:
        ConfigError: If *configuration* fails pre-flight validation.
        RamlParseError: If the RAML cannot be loaded or is invalid.
        CodeModelError: If the class model cannot be built.
    """
    from ramlgen.parser import load_raml, parse_raml

    diagnostics = diagnostics or OutputDiagnostics()
    validate_configuration(configuration, diagnostics)

    diagnostics.debug(f"Loading RAML from {source}")
    content = load_raml(source, encoding=configuration.source_encoding)
    document = parse_raml(content)
    return _generate(document, configuration, diagnostics)


def run_document(
    document: RamlDocument,
    configuration: Configuration,
    diagnostics: Optional[Diagnostics] = None,
) -> list[Path]:
    """Generate the interfaces of an already parsed *document*."""
    diagnostics = diagnostics or OutputDiagnostics()
    validate_configuration(configuration, diagnostics)
    return _generate(document, configuration, diagnostics)


def build_code_model(
    document: RamlDocument,
    configuration: Configuration,
    diagnostics: Optional[Diagnostics] = None,
) -> CodeModel:
    """Build the class model for *document* without writing anything.

    The output directory is not consulted, so this works with a
    configuration that only carries a base package.
    """
    context = GenerationContext(configuration, diagnostics=diagnostics)
    generate(document, context)
    return context.code_model


def _generate(
    document: RamlDocument,
    configuration: Configuration,
    diagnostics: Diagnostics,
) -> list[Path]:
    context = GenerationContext(configuration, diagnostics=diagnostics)
    generate(document, context)
    paths = context.generate()
    diagnostics.debug(f"Wrote {len(paths)} file(s) to {configuration.output_directory}")
    return paths
