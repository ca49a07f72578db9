"""JSR-303 (Bean Validation) constraints derived from named parameter facets.

Only applied when ``use_jsr303_annotations`` is enabled. Mapping:

* required without default -> ``@NotNull``
* string ``minLength``/``maxLength`` -> ``@Size(min=, max=)``
* string ``pattern`` -> ``@Pattern(regexp=)``
* integer ``minimum``/``maximum`` -> ``@Min``/``@Max``, rounded inwards
* number ``minimum``/``maximum`` -> ``@DecimalMin``/``@DecimalMax``

Facets of enum and repeatable parameters other than ``required`` are
ignored: the constraints would apply to the enum or list, not its values.
"""

from __future__ import annotations

import math

from ramlgen.codemodel.model import JParam
from ramlgen.models import AbstractParam, ParamType

_PACKAGE = "javax.validation.constraints"

NOT_NULL = f"{_PACKAGE}.NotNull"
SIZE = f"{_PACKAGE}.Size"
PATTERN = f"{_PACKAGE}.Pattern"
MIN = f"{_PACKAGE}.Min"
MAX = f"{_PACKAGE}.Max"
DECIMAL_MIN = f"{_PACKAGE}.DecimalMin"
DECIMAL_MAX = f"{_PACKAGE}.DecimalMax"


def add_constraint_annotations(param: AbstractParam, jparam: JParam) -> None:
    """Annotate *jparam* with the constraints implied by *param*."""
    if param.required and param.default is None:
        jparam.annotate(NOT_NULL)

    if param.enum_values or param.repeat:
        return

    if param.type in (None, ParamType.STRING.value):
        if param.min_length is not None or param.max_length is not None:
            size = jparam.annotate(SIZE)
            if param.min_length is not None:
                size.param("min", param.min_length)
            if param.max_length is not None:
                size.param("max", param.max_length)
        if param.pattern:
            jparam.annotate(PATTERN).param("regexp", param.pattern)

    elif param.type == ParamType.INTEGER.value:
        if param.minimum is not None:
            jparam.annotate(MIN).param("value", math.ceil(param.minimum))
        if param.maximum is not None:
            jparam.annotate(MAX).param("value", math.floor(param.maximum))

    elif param.type == ParamType.NUMBER.value:
        if param.minimum is not None:
            jparam.annotate(DECIMAL_MIN).param("value", _decimal(param.minimum))
        if param.maximum is not None:
            jparam.annotate(DECIMAL_MAX).param("value", _decimal(param.maximum))


def _decimal(value: float) -> str:
    # @DecimalMin takes its bound as a string
    return repr(float(value))
