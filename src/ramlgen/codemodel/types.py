"""Type references used by the class model.

A :class:`TypeRef` names a Java type wherever one can appear: a method return
type, a parameter type, an annotation type, or a type argument. Three kinds
exist:

* :class:`PrimitiveType` -- ``void``, ``boolean``, ``long``, ``double``.
* :class:`ClassRef` -- a class outside the model, known only by its fully
  qualified name, optionally narrowed with type arguments
  (``java.util.List<java.lang.Long>``).
* :class:`~ramlgen.codemodel.model.DefinedClass` -- a type the model itself
  generates (interfaces, nested enums, annotation types).

The module also exports the standard references the generator needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class TypeRef:
    """Common interface of every type reference."""

    is_primitive = False

    @property
    def fqn(self) -> str:
        """Fully qualified name without type arguments."""
        raise NotImplementedError

    @property
    def package(self) -> str:
        """Package of the outermost enclosing type (``""`` for primitives)."""
        return ""

    @property
    def import_name(self) -> str | None:
        """Name to list in an ``import`` statement, or ``None`` for primitives."""
        return None

    @property
    def simple_name(self) -> str:
        """Name as written inside a compilation unit that imports it."""
        raise NotImplementedError

    @property
    def type_arguments(self) -> tuple[TypeRef, ...]:
        return ()

    def boxed(self) -> TypeRef:
        """The reference type holding values of this type (itself for classes)."""
        return self


@dataclass(frozen=True)
class PrimitiveType(TypeRef):
    """A Java primitive type or ``void``."""

    keyword: str
    wrapper: str | None = None

    is_primitive = True

    @property
    def fqn(self) -> str:
        return self.keyword

    @property
    def simple_name(self) -> str:
        return self.keyword

    def boxed(self) -> TypeRef:
        if self.wrapper is None:
            return self
        return ClassRef(self.wrapper)

    def __str__(self) -> str:
        return self.keyword


@dataclass(frozen=True)
class ClassRef(TypeRef):
    """A reference to a class the model does not define.

    Example::

        >>> LIST.narrow(LONG_CLASS)
        ClassRef(name='java.util.List', args=(ClassRef(name='java.lang.Long', args=()),))
    """

    name: str
    args: tuple[TypeRef, ...] = field(default=())

    @property
    def fqn(self) -> str:
        return self.name

    @property
    def package(self) -> str:
        return self.name.rpartition(".")[0]

    @property
    def import_name(self) -> str | None:
        return self.name

    @property
    def simple_name(self) -> str:
        return self.name.rpartition(".")[2]

    @property
    def type_arguments(self) -> tuple[TypeRef, ...]:
        return self.args

    def narrow(self, *type_arguments: TypeRef) -> ClassRef:
        """Return this class parameterised with *type_arguments* (boxed)."""
        return ClassRef(self.name, tuple(t.boxed() for t in type_arguments))

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.args)}>"


VOID = PrimitiveType("void")
BOOLEAN = PrimitiveType("boolean", "java.lang.Boolean")
LONG = PrimitiveType("long", "java.lang.Long")
DOUBLE = PrimitiveType("double", "java.lang.Double")

OBJECT = ClassRef("java.lang.Object")
STRING = ClassRef("java.lang.String")
BOOLEAN_CLASS = ClassRef("java.lang.Boolean")
LONG_CLASS = ClassRef("java.lang.Long")
DOUBLE_CLASS = ClassRef("java.lang.Double")
DATE = ClassRef("java.util.Date")
FILE = ClassRef("java.io.File")
LIST = ClassRef("java.util.List")

OVERRIDE = ClassRef("java.lang.Override")
ILLEGAL_ARGUMENT_EXCEPTION = ClassRef("java.lang.IllegalArgumentException")
