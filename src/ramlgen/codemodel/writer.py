"""Render a :class:`~ramlgen.codemodel.model.CodeModel` as Java source files.

Rendering is split from writing so that a run either produces every file or
none: :func:`write_code_model` renders all compilation units in memory first
and only then touches the file system.

Layout lives in Jinja2 templates under ``codemodel/templates/``; this module
builds their context. Each type is rendered at column zero and indented by
its enclosing type's template. Naming rules:

* imports are collected from every type reference in the unit, ``java.lang``
  and same-package types are omitted, and the rest are sorted;
* the unit's own type and every type nested in it own their simple names,
  so an outside type spelled the same way (``javax.ws.rs.Path`` next to a
  nested ``enum Path``) is written fully qualified;
* otherwise, when two referenced types share a simple name, the first one
  wins and the other is written fully qualified;
* nested enums carry their wire literal and a ``fromString`` factory, which
  JAX-RS uses to convert request values.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ramlgen.codemodel.model import (
    Annotation,
    AnnotationValue,
    ClassKind,
    CodeModel,
    DefinedClass,
    EnumValue,
    JavaDoc,
    JMethod,
)
from ramlgen.codemodel.types import ILLEGAL_ARGUMENT_EXCEPTION, OVERRIDE, STRING, TypeRef
from ramlgen.exceptions import CodeModelError

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 templates for Java sources (``codemodel/templates/``)."""


def write_code_model(
    code_model: CodeModel,
    output_directory: Path,
    encoding: str = "utf-8",
) -> list[Path]:
    """Write one ``.java`` file per top-level type under *output_directory*.

    Package directories are created as needed.

    Args:
        code_model: The finished model.
        output_directory: Root of the source tree (must exist).
        encoding: Encoding of the written files.

    Returns:
        The written paths, in declaration order.
    """
    rendered = [
        (_source_path(output_directory, defined), render_class(defined))
        for defined in code_model.classes()
    ]
    for path, source in rendered:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding=encoding)
    return [path for path, _ in rendered]


def _source_path(output_directory: Path, defined: DefinedClass) -> Path:
    package_dir = output_directory.joinpath(*defined.package.split(".")) if defined.package else output_directory
    return package_dir / f"{defined.name}.java"


def render_class(defined: DefinedClass) -> str:
    """Render the compilation unit of the top-level type *defined*."""
    namer = _Namer(defined)
    # the body goes first: naming it collects the imports
    body = _render_type(defined, namer, top_level=True)
    template = _ENV.get_template("compilation_unit.java.j2")
    return template.render(package=defined.package, imports=namer.imports(), body=body)


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the Java templates.

    Autoescape is off for ``.java.j2`` files: they produce Java, not HTML.
    Block trimming and lstrip keep template tags out of the generated lines.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("java.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


_ENV = _create_jinja_env()


def _render(template_name: str, **context: Any) -> str:
    # members are joined and indented by the enclosing template
    return _ENV.get_template(template_name).render(**context).rstrip("\n")


class _Namer:
    """Decide how each type is spelled inside one compilation unit."""

    def __init__(self, unit: DefinedClass) -> None:
        self._unit = unit
        self._package = unit.package
        self._by_simple: dict[str, str] = {}
        self._imports: set[str] = set()
        self._declare(unit)

    def _declare(self, defined: DefinedClass) -> None:
        self._by_simple[defined.name] = defined.fqn
        for nested in defined.classes.values():
            self._declare(nested)

    def name(self, type_ref: TypeRef) -> str:
        if type_ref.is_primitive:
            return type_ref.simple_name
        base = self._base_name(type_ref)
        if type_ref.type_arguments:
            args = ", ".join(self.name(a) for a in type_ref.type_arguments)
            return f"{base}<{args}>"
        return base

    def _base_name(self, type_ref: TypeRef) -> str:
        import_name = type_ref.import_name
        if import_name is None:
            raise CodeModelError(f"Type {type_ref} cannot be referenced by name")
        head = import_name.rpartition(".")[2]
        owner = self._by_simple.setdefault(head, import_name)
        if owner != import_name:
            return type_ref.fqn
        if import_name != self._unit.fqn and not self._implicit(import_name):
            self._imports.add(import_name)
        return type_ref.simple_name

    def _implicit(self, import_name: str) -> bool:
        package = import_name.rpartition(".")[0]
        return package in ("java.lang", self._package)

    def imports(self) -> list[str]:
        return sorted(self._imports)


def _render_type(defined: DefinedClass, namer: _Namer, top_level: bool = False) -> str:
    annotations = [_render_annotation(a, namer) for a in defined.annotations]
    members: list[str] = []
    if defined.kind is ClassKind.ENUM:
        members.append(_render_enum_body(defined, namer))
    members += [_render_method(method, namer) for method in defined.methods]
    members += [_render_type(nested, namer) for nested in defined.classes.values()]
    return _render(
        "type.java.j2",
        doc=_doc_context(defined.javadoc),
        annotations=annotations,
        top_level=top_level,
        kind=defined.kind.value,
        name=defined.name,
        members=members,
    )


def _render_enum_body(defined: DefinedClass, namer: _Namer) -> str:
    return _render(
        "enum_body.java.j2",
        name=defined.name,
        constants=[
            {"name": c.name, "literal": _literal(c.literal)} for c in defined.enum_constants
        ],
        field=_enum_field_name(defined),
        string=namer.name(STRING),
        override=namer.name(OVERRIDE),
        illegal_argument=namer.name(ILLEGAL_ARGUMENT_EXCEPTION),
    )


def _enum_field_name(defined: DefinedClass) -> str:
    """Name of the field holding the literal, clear of every constant name."""
    taken = {c.name for c in defined.enum_constants}
    field = "value"
    while field in taken:
        field = "_" + field
    return field


def _render_method(method: JMethod, namer: _Namer) -> str:
    annotations = [_render_annotation(a, namer) for a in method.annotations]
    return_type = namer.name(method.return_type)
    params = [
        {
            "annotations": [_render_annotation(a, namer) for a in param.annotations],
            "type": namer.name(param.type),
            "name": param.name,
        }
        for param in method.params
    ]
    return _render(
        "method.java.j2",
        doc=_doc_context(method.javadoc),
        annotations=annotations,
        return_type=return_type,
        name=method.name,
        params=params,
    )


def _render_annotation(annotation: Annotation, namer: _Namer) -> str:
    name = "@" + namer.name(annotation.type)
    params = annotation.params
    if not params:
        return name
    if list(params) == ["value"]:
        return f"{name}({_render_value(params['value'], namer)})"
    rendered = ", ".join(f"{key} = {_render_value(value, namer)}" for key, value in params.items())
    return f"{name}({rendered})"


def _render_value(value: AnnotationValue, namer: _Namer) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, EnumValue):
        return f"{namer.name(value.type)}.{value.constant}"
    if isinstance(value, list):
        return "{" + ", ".join(_render_value(v, namer) for v in value) + "}"
    if isinstance(value, int):
        return f"{value}L" if abs(value) > 2**31 - 1 else str(value)
    if isinstance(value, float):
        return repr(value)
    return _literal(str(value))


def _literal(text: str) -> str:
    """Quote *text* as a Java string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _doc_context(javadoc: JavaDoc) -> dict[str, Any]:
    return {
        "paragraphs": [_doc_lines(p) or [""] for p in javadoc.paragraphs],
        "params": [{"name": name, "lines": _doc_lines(text)} for name, text in javadoc.params.items()],
    }


def _doc_lines(text: str) -> list[str]:
    return [line.rstrip() for line in text.replace("*/", "*&#47;").splitlines()]
