"""Java class model -- the construction API the generator writes into.

Sub-modules:

* :mod:`~ramlgen.codemodel.types` -- type references (primitives, external
  classes, generic narrowing) and the standard constants.
* :mod:`~ramlgen.codemodel.model` -- :class:`CodeModel` and the declaration
  objects (classes, methods, parameters, annotations, javadoc).
* :mod:`~ramlgen.codemodel.writer` -- rendering to Java source and flushing
  to disk.
"""

from ramlgen.codemodel.model import ClassKind, CodeModel, DefinedClass, JMethod, JParam
from ramlgen.codemodel.writer import render_class, write_code_model

__all__ = [
    "ClassKind",
    "CodeModel",
    "DefinedClass",
    "JMethod",
    "JParam",
    "render_class",
    "write_code_model",
]
