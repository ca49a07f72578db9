"""In-memory Java class model.

The generator never produces source text itself. It builds a tree of
objects here -- classes, methods, parameters, annotations, javadoc -- and
hands the finished :class:`CodeModel` to :mod:`ramlgen.codemodel.writer`
for rendering.

The model enforces the Java rules that make generated code fail to compile
when broken:

* two classes with the same fully qualified name (top-level or nested);
* two parameters with the same name in one method;
* two enum constants with the same name in one enum.

Each raises :class:`~ramlgen.exceptions.NameCollisionError`. Everything
else (method overloading, empty bodies) is left to the caller.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from ramlgen.codemodel.types import ClassRef, TypeRef
from ramlgen.exceptions import CodeModelError, NameCollisionError


class ClassKind(str, enum.Enum):
    """Kinds of type declaration the model can hold."""

    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "@interface"


@dataclass(frozen=True)
class EnumValue:
    """A constant of an external enum used as an annotation value (``ElementType.METHOD``)."""

    type: ClassRef
    constant: str


AnnotationValue = Union[str, int, float, bool, EnumValue, list]


@dataclass(eq=False)
class Annotation:
    """An annotation use with its ordered element values."""

    type: TypeRef
    params: dict[str, AnnotationValue] = field(default_factory=dict)

    def param(self, name: str, value: AnnotationValue) -> Annotation:
        """Set element *name* to *value* and return ``self`` for chaining."""
        self.params[name] = value
        return self


class Annotatable:
    """Mixin for model elements that carry annotations."""

    annotations: list[Annotation]

    def annotate(self, annotation_type: TypeRef | str) -> Annotation:
        """Attach a new annotation of *annotation_type* and return it.

        A string is taken as the fully qualified name of an external
        annotation type.
        """
        if isinstance(annotation_type, str):
            annotation_type = ClassRef(annotation_type)
        annotation = Annotation(annotation_type)
        self.annotations.append(annotation)
        return annotation

    def find_annotation(self, fqn: str) -> Optional[Annotation]:
        """Return the first annotation whose type is *fqn*, if any."""
        for annotation in self.annotations:
            if annotation.type.fqn == fqn:
                return annotation
        return None


@dataclass(eq=False)
class JavaDoc:
    """Javadoc comment: free-text paragraphs followed by ``@param`` tags."""

    paragraphs: list[str] = field(default_factory=list)
    params: dict[str, str] = field(default_factory=dict)

    def add(self, text: str) -> JavaDoc:
        self.paragraphs.append(text)
        return self

    def add_param(self, name: str, text: str) -> JavaDoc:
        self.params[name] = text
        return self

    def is_empty(self) -> bool:
        return not self.paragraphs and not self.params


@dataclass(eq=False)
class JParam(Annotatable):
    """A method parameter."""

    name: str
    type: TypeRef
    annotations: list[Annotation] = field(default_factory=list)


@dataclass(eq=False)
class JMethod(Annotatable):
    """A method declaration (abstract: interfaces only carry signatures)."""

    name: str
    return_type: TypeRef
    params: list[JParam] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)
    javadoc: JavaDoc = field(default_factory=JavaDoc)

    def param(self, param_type: TypeRef, name: str) -> JParam:
        """Append a parameter.

        Raises:
            NameCollisionError: If the method already has a parameter *name*.
        """
        if not name:
            raise CodeModelError(f"Empty parameter name in method {self.name}")
        if any(p.name == name for p in self.params):
            raise NameCollisionError(
                f"Duplicate parameter '{name}' in method {self.name}"
            )
        jparam = JParam(name, param_type)
        self.params.append(jparam)
        return jparam


@dataclass(frozen=True)
class EnumConstant:
    """An enum constant together with the wire literal it stands for."""

    name: str
    literal: str


@dataclass(eq=False)
class DefinedClass(TypeRef, Annotatable):
    """A type declared by the model: interface, enum or annotation type."""

    name: str
    kind: ClassKind
    owner_package: str = ""
    outer: Optional[DefinedClass] = None
    annotations: list[Annotation] = field(default_factory=list)
    javadoc: JavaDoc = field(default_factory=JavaDoc)
    methods: list[JMethod] = field(default_factory=list)
    classes: dict[str, DefinedClass] = field(default_factory=dict)
    enum_constants: list[EnumConstant] = field(default_factory=list)

    @property
    def fqn(self) -> str:
        if self.outer is not None:
            return f"{self.outer.fqn}.{self.name}"
        return f"{self.owner_package}.{self.name}" if self.owner_package else self.name

    @property
    def package(self) -> str:
        return self.top_level.owner_package

    @property
    def top_level(self) -> DefinedClass:
        """The outermost class enclosing this one (``self`` when top-level)."""
        current = self
        while current.outer is not None:
            current = current.outer
        return current

    @property
    def import_name(self) -> str | None:
        return self.top_level.fqn

    @property
    def simple_name(self) -> str:
        if self.outer is not None:
            return f"{self.outer.simple_name}.{self.name}"
        return self.name

    def method(self, name: str, return_type: TypeRef) -> JMethod:
        """Declare a new method and return it. Overloads are allowed."""
        jmethod = JMethod(name, return_type)
        self.methods.append(jmethod)
        return jmethod

    def get_methods(self, name: str) -> list[JMethod]:
        return [m for m in self.methods if m.name == name]

    def nested(self, name: str, kind: ClassKind) -> DefinedClass:
        """Declare a nested type.

        Raises:
            NameCollisionError: If a nested type *name* already exists, or
                *name* equals the enclosing type's name.
        """
        if name in self.classes or name == self.name:
            raise NameCollisionError(f"Type {self.fqn}.{name} is already defined")
        nested = DefinedClass(name, kind, outer=self)
        self.classes[name] = nested
        return nested

    def enum_constant(self, name: str, literal: str) -> EnumConstant:
        """Append an enum constant.

        Raises:
            CodeModelError: If this class is not an enum.
            NameCollisionError: If the constant name is already used.
        """
        if self.kind is not ClassKind.ENUM:
            raise CodeModelError(f"{self.fqn} is not an enum")
        if any(c.name == name for c in self.enum_constants):
            raise NameCollisionError(f"Duplicate enum constant '{name}' in {self.fqn}")
        constant = EnumConstant(name, literal)
        self.enum_constants.append(constant)
        return constant

    def __str__(self) -> str:
        return self.fqn


class CodeModel:
    """Registry of every top-level type produced by one generation run."""

    def __init__(self) -> None:
        self._classes: dict[str, DefinedClass] = {}

    def define_class(self, package: str, name: str, kind: ClassKind) -> DefinedClass:
        """Declare a top-level type in *package*.

        Raises:
            NameCollisionError: If ``package.name`` is already defined.
        """
        defined = DefinedClass(name, kind, owner_package=package)
        if defined.fqn in self._classes:
            raise NameCollisionError(f"Type {defined.fqn} is already defined")
        self._classes[defined.fqn] = defined
        return defined

    def get(self, fqn: str) -> Optional[DefinedClass]:
        return self._classes.get(fqn)

    def classes(self) -> Iterator[DefinedClass]:
        """Iterate over top-level types in declaration order."""
        return iter(list(self._classes.values()))

    def __len__(self) -> int:
        return len(self._classes)

    def describe(self) -> list[dict[str, Any]]:
        """Structural summary (names, annotations, parameters) for comparisons and inspection."""
        return [_describe_class(c) for c in self._classes.values()]


def _describe_annotation(annotation: Annotation) -> dict[str, Any]:
    return {"type": annotation.type.fqn, "params": dict(annotation.params)}


def _describe_class(defined: DefinedClass) -> dict[str, Any]:
    return {
        "name": defined.fqn,
        "kind": defined.kind.value,
        "annotations": [_describe_annotation(a) for a in defined.annotations],
        "methods": [
            {
                "name": m.name,
                "annotations": [_describe_annotation(a) for a in m.annotations],
                "params": [
                    {
                        "name": p.name,
                        "type": str(p.type),
                        "annotations": [_describe_annotation(a) for a in p.annotations],
                    }
                    for p in m.params
                ],
            }
            for m in defined.methods
        ],
        "constants": [(c.name, c.literal) for c in defined.enum_constants],
        "classes": [_describe_class(c) for c in defined.classes.values()],
    }
