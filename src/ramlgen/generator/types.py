"""Type inference engine: map RAML named parameters to Java types.

The decision table, applied in order:

1. A parameter with enumeration values becomes a nested enum of the
   current resource interface, named after the parameter
   (``sort`` -> ``Sort``), created once per interface and name.
2. Otherwise the declared kind picks a scalar:

   =========  ============  ===========
   kind       primitive     boxed
   =========  ============  ===========
   (none)     ``String``    ``String``
   string     ``String``    ``String``
   boolean    ``boolean``   ``Boolean``
   integer    ``long``      ``Long``
   number     ``double``    ``Double``
   date       ``Date``      ``Date``
   file       ``File``      ``File``
   =========  ============  ===========

   The primitive column applies when :func:`use_primitive` holds. An
   unknown kind is reported to the diagnostics sink and maps to
   ``Object``.
3. A repeatable parameter is wrapped in ``List<...>`` of the boxed scalar.

Enumerations win over repetition: a repeatable enum parameter maps to the
bare enum.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ramlgen.codemodel.types import (
    BOOLEAN,
    BOOLEAN_CLASS,
    DATE,
    DOUBLE,
    DOUBLE_CLASS,
    FILE,
    LIST,
    LONG,
    LONG_CLASS,
    OBJECT,
    STRING,
    TypeRef,
)
from ramlgen.exceptions import CodeModelError
from ramlgen.generator.names import to_type_name
from ramlgen.models import AbstractParam, ParamType

if TYPE_CHECKING:
    from ramlgen.codemodel.model import DefinedClass
    from ramlgen.generator.context import GenerationContext
    from ramlgen.generator.diagnostics import Diagnostics

_SCALAR_TYPES: dict[ParamType, tuple[TypeRef, TypeRef]] = {
    ParamType.STRING: (STRING, STRING),
    ParamType.BOOLEAN: (BOOLEAN, BOOLEAN_CLASS),
    ParamType.INTEGER: (LONG, LONG_CLASS),
    ParamType.NUMBER: (DOUBLE, DOUBLE_CLASS),
    ParamType.DATE: (DATE, DATE),
    ParamType.FILE: (FILE, FILE),
}


def use_primitive(param: AbstractParam) -> bool:
    """Whether *param* can be bound to a primitive (never-null) type.

    True when the parameter is not repeatable and is either required or
    has a non-blank default value.
    """
    has_default = param.default is not None and bool(param.default.strip())
    return not param.repeat and (param.required or has_default)


def scalar_type(param: AbstractParam, diagnostics: Diagnostics) -> TypeRef:
    """Java type for the declared kind of *param*, ignoring enum and repeat."""
    if param.type is None:
        return STRING
    try:
        kind = ParamType(param.type)
    except ValueError:
        diagnostics.warning(f"Unsupported RAML type: {param.type}")
        return OBJECT
    primitive, boxed = _SCALAR_TYPES[kind]
    return primitive if use_primitive(param) else boxed


def infer_type(
    param: AbstractParam,
    context_name: str,
    context: GenerationContext,
    resource_interface: Optional[DefinedClass] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> TypeRef:
    """Infer the Java type of *param*.

    Args:
        param: The named parameter.
        context_name: Normalised variable name of the parameter, used to
            name a synthesised enum.
        context: The current generation context.
        resource_interface: Interface that owns a synthesised enum.
            Defaults to ``context.current_resource_interface``.
        diagnostics: Sink for warnings. Defaults to ``context.diagnostics``.

    Raises:
        CodeModelError: If an enum is needed but no interface is available.
        NameCollisionError: If the enum name clashes in the interface.
    """
    if param.enum_values:
        owner = resource_interface or context.current_resource_interface
        if owner is None:
            raise CodeModelError(
                f"No resource interface to hold the enum for parameter {context_name}"
            )
        return context.create_resource_enum(owner, to_type_name(context_name), param.enum_values)

    scalar = scalar_type(param, diagnostics or context.diagnostics)
    if param.repeat:
        return LIST.narrow(scalar)
    return scalar
