"""Per-run generation state.

A :class:`GenerationContext` is created once per run, after the
configuration passed its pre-flight checks, and discarded after
:meth:`GenerationContext.generate` flushed the class model to disk. It is
not meant to be shared between runs or threads.

It owns:

* the :class:`~ramlgen.codemodel.model.CodeModel` being built;
* the configuration (base package, output directory, feature toggles);
* the diagnostics sink;
* the interface currently being filled (informational: the builder passes
  the interface explicitly down its walk);
* the HTTP-verb annotation mapping and the enums already synthesised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ramlgen.codemodel.model import ClassKind, CodeModel, DefinedClass, EnumValue, JMethod
from ramlgen.codemodel.types import ClassRef, TypeRef
from ramlgen.codemodel.writer import write_code_model
from ramlgen.exceptions import CodeModelError, ConfigError, NameCollisionError
from ramlgen.generator.diagnostics import Diagnostics, OutputDiagnostics
from ramlgen.generator.names import to_enum_constant_name
from ramlgen.models import Configuration, HTTPMethod

RESOURCE_SUBPACKAGE = "resource"
SUPPORT_SUBPACKAGE = "support"

_HTTP_METHOD_ANNOTATION = ClassRef("javax.ws.rs.HttpMethod")
_TARGET = ClassRef("java.lang.annotation.Target")
_RETENTION = ClassRef("java.lang.annotation.Retention")
_ELEMENT_TYPE = ClassRef("java.lang.annotation.ElementType")
_RETENTION_POLICY = ClassRef("java.lang.annotation.RetentionPolicy")

# Verbs JAX-RS 1.1/2.0 ships annotations for. The others get one synthesised
# in the support package.
_JAXRS_VERB_ANNOTATIONS: dict[HTTPMethod, ClassRef] = {
    HTTPMethod.GET: ClassRef("javax.ws.rs.GET"),
    HTTPMethod.POST: ClassRef("javax.ws.rs.POST"),
    HTTPMethod.PUT: ClassRef("javax.ws.rs.PUT"),
    HTTPMethod.DELETE: ClassRef("javax.ws.rs.DELETE"),
    HTTPMethod.HEAD: ClassRef("javax.ws.rs.HEAD"),
    HTTPMethod.OPTIONS: ClassRef("javax.ws.rs.OPTIONS"),
}


class GenerationContext:
    """State shared by the builder and the type inference engine during one run.

    Args:
        configuration: A configuration that passed
            :func:`~ramlgen.config.validate_configuration`.
        code_model: The model to build into. A fresh one by default.
        diagnostics: Sink for warnings. Defaults to
            :class:`~ramlgen.generator.diagnostics.OutputDiagnostics`.
    """

    def __init__(
        self,
        configuration: Configuration,
        code_model: Optional[CodeModel] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> None:
        if not configuration.base_package_name:
            raise ConfigError("base package name can't be empty")
        self.configuration = configuration
        self.code_model = code_model if code_model is not None else CodeModel()
        self.diagnostics: Diagnostics = diagnostics or OutputDiagnostics()
        self.current_resource_interface: Optional[DefinedClass] = None

        base = configuration.base_package_name
        self.resource_package = f"{base}.{RESOURCE_SUBPACKAGE}"
        self.support_package = f"{base}.{SUPPORT_SUBPACKAGE}"

        self._http_method_annotations: dict[HTTPMethod, TypeRef] = dict(_JAXRS_VERB_ANNOTATIONS)
        self._enums: dict[tuple[str, str], tuple[tuple[str, ...], DefinedClass]] = {}

    # ------------------------------------------------------------------ #
    # Class model construction
    # ------------------------------------------------------------------ #

    def create_resource_interface(self, name: str) -> DefinedClass:
        """Declare the public interface for a top-level resource."""
        return self.code_model.define_class(self.resource_package, name, ClassKind.INTERFACE)

    def create_resource_method(
        self,
        resource_interface: DefinedClass,
        name: str,
        return_type: TypeRef,
    ) -> JMethod:
        """Declare a method on *resource_interface*.

        Raises:
            NameCollisionError: If the interface already has a method *name*.
                Two actions normalising to the same identifier would
                otherwise produce overloads JAX-RS cannot tell apart.
        """
        if resource_interface.get_methods(name):
            raise NameCollisionError(
                f"Method {name} is already defined in {resource_interface.fqn}"
            )
        return resource_interface.method(name, return_type)

    def create_resource_enum(
        self,
        resource_interface: DefinedClass,
        name: str,
        values: list[str],
    ) -> DefinedClass:
        """Return the enum *name* nested in *resource_interface*, creating it on first use.

        Enums are memoised per (interface, name): asking again with the same
        literals returns the existing type.

        Raises:
            NameCollisionError: If an enum of that name already exists with
                different literals, or the name clashes with another type.
        """
        key = (resource_interface.fqn, name)
        literals = tuple(values)
        existing = self._enums.get(key)
        if existing is not None:
            known_literals, enum_class = existing
            if known_literals != literals:
                raise NameCollisionError(
                    f"Enum {enum_class.fqn} is already defined with values "
                    f"{list(known_literals)}, not {list(literals)}"
                )
            return enum_class

        enum_class = resource_interface.nested(name, ClassKind.ENUM)
        for literal in literals:
            enum_class.enum_constant(to_enum_constant_name(literal), literal)
        self._enums[key] = (literals, enum_class)
        return enum_class

    def add_http_method_annotation(self, http_method: HTTPMethod | str, method: JMethod) -> None:
        """Annotate *method* with the JAX-RS marker for *http_method*.

        Raises:
            CodeModelError: If *http_method* is not a RAML 0.8 verb.
        """
        try:
            verb = HTTPMethod(http_method.lower()) if isinstance(http_method, str) else http_method
        except ValueError as exc:
            raise CodeModelError(f"Unsupported HTTP method: {http_method}") from exc

        annotation_type = self._http_method_annotations.get(verb)
        if annotation_type is None:
            annotation_type = self._create_http_method_annotation(verb)
            self._http_method_annotations[verb] = annotation_type
        method.annotate(annotation_type)

    def _create_http_method_annotation(self, verb: HTTPMethod) -> DefinedClass:
        """Synthesise ``@<VERB>`` in the support package, meta-annotated with ``@HttpMethod``."""
        name = verb.name
        annotation_type = self.code_model.define_class(
            self.support_package, name, ClassKind.ANNOTATION
        )
        annotation_type.javadoc.add(
            f"Indicates that the annotated method responds to HTTP {name} requests."
        )
        annotation_type.annotate(_TARGET).param(
            "value", [EnumValue(_ELEMENT_TYPE, "METHOD")]
        )
        annotation_type.annotate(_RETENTION).param(
            "value", EnumValue(_RETENTION_POLICY, "RUNTIME")
        )
        annotation_type.annotate(_HTTP_METHOD_ANNOTATION).param("value", name)
        self.diagnostics.debug(f"Synthesised annotation {annotation_type.fqn}")
        return annotation_type

    # ------------------------------------------------------------------ #
    # Flush
    # ------------------------------------------------------------------ #

    def generate(self) -> list[Path]:
        """Render the class model and write it under the output directory.

        Returns:
            The paths of the written ``.java`` files.
        """
        output_directory = self.configuration.output_directory
        if output_directory is None:
            raise ConfigError("outputDirectory can't be null")
        return write_code_model(
            self.code_model, output_directory, self.configuration.source_encoding
        )
