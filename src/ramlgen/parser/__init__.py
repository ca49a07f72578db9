"""RAML parser -- load, validate, apply templates, and extract resources.

This sub-package turns a RAML 0.8 document (local file, remote URL or
stdin) into the :class:`~ramlgen.models.RamlDocument` the generator
consumes.

Typical usage::

    from ramlgen.parser import load_raml, parse_raml

    document = parse_raml(load_raml("api.raml"))

Sub-modules:

* :mod:`~ramlgen.parser.loader` -- I/O layer (URL, file, stdin), header
  check and YAML parsing.
* :mod:`~ramlgen.parser.validator` -- Structural validation reporting every
  problem at once.
* :mod:`~ramlgen.parser.resolver` -- Resource type and trait application.
* :mod:`~ramlgen.parser.extractor` -- Builds the description tree.
"""

from ramlgen.exceptions import RamlParseError
from ramlgen.models import RamlDocument
from ramlgen.parser.extractor import extract_document
from ramlgen.parser.loader import load_raml, parse_content, validate_raml_version
from ramlgen.parser.resolver import apply_templates
from ramlgen.parser.validator import validate_raml


def parse_raml(content: str) -> RamlDocument:
    """Parse the text of a RAML 0.8 document.

    Raises:
        RamlParseError: If the header is wrong, the YAML is invalid, or the
            document fails validation. Validation problems are listed one
            per line after ``Invalid RAML definition:``.
    """
    validate_raml_version(content)
    raw = parse_content(content)
    results = validate_raml(raw)
    if results:
        raise RamlParseError(
            "Invalid RAML definition:\n" + "\n".join(str(result) for result in results)
        )
    return extract_document(apply_templates(raw))


__all__ = [
    "apply_templates",
    "extract_document",
    "load_raml",
    "parse_content",
    "parse_raml",
    "validate_raml",
    "validate_raml_version",
]
