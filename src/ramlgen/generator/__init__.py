"""JAX-RS interface generation from a parsed RAML document.

Public API:

* :func:`~ramlgen.generator.builder.generate` -- flatten a
  :class:`~ramlgen.models.RamlDocument` into a class model.
* :class:`~ramlgen.generator.context.GenerationContext` -- per-run state.
* :func:`~ramlgen.generator.types.infer_type` -- parameter type inference.
* :func:`~ramlgen.generator.runner.run` -- the whole pipeline from a RAML
  source to written files.
"""

from ramlgen.generator.builder import generate
from ramlgen.generator.context import GenerationContext
from ramlgen.generator.diagnostics import CollectingDiagnostics, Diagnostics, OutputDiagnostics
from ramlgen.generator.runner import build_code_model, run, run_document
from ramlgen.generator.types import infer_type

__all__ = [
    "CollectingDiagnostics",
    "Diagnostics",
    "GenerationContext",
    "OutputDiagnostics",
    "build_code_model",
    "generate",
    "infer_type",
    "run",
    "run_document",
]
