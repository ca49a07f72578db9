"""Tests for ramlgen.codemodel.model and ramlgen.codemodel.types."""

from __future__ import annotations

import pytest

from ramlgen.codemodel.model import ClassKind, CodeModel, DefinedClass
from ramlgen.codemodel.types import (
    BOOLEAN,
    LIST,
    LONG,
    LONG_CLASS,
    STRING,
    VOID,
    ClassRef,
)
from ramlgen.exceptions import CodeModelError, NameCollisionError


@pytest.fixture
def model() -> CodeModel:
    return CodeModel()


@pytest.fixture
def users(model: CodeModel) -> DefinedClass:
    return model.define_class("com.example.resource", "Users", ClassKind.INTERFACE)


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------


class TestTypeRefs:
    def test_primitive(self) -> None:
        assert LONG.is_primitive
        assert LONG.simple_name == "long"
        assert LONG.import_name is None
        assert LONG.boxed() == LONG_CLASS

    def test_void_has_no_box(self) -> None:
        assert VOID.boxed() is VOID

    def test_class_ref_names(self) -> None:
        assert STRING.fqn == "java.lang.String"
        assert STRING.package == "java.lang"
        assert STRING.simple_name == "String"
        assert STRING.boxed() is STRING

    def test_narrow_boxes_arguments(self) -> None:
        assert LIST.narrow(BOOLEAN) == ClassRef("java.util.List", (ClassRef("java.lang.Boolean"),))

    def test_narrow_keeps_raw_type(self) -> None:
        LIST.narrow(LONG)
        assert LIST.type_arguments == ()

    def test_str(self) -> None:
        assert str(LIST.narrow(LONG)) == "java.util.List<java.lang.Long>"
        assert str(LONG) == "long"


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


class TestDefinedClass:
    def test_top_level_names(self, users: DefinedClass) -> None:
        assert users.fqn == "com.example.resource.Users"
        assert users.package == "com.example.resource"
        assert users.simple_name == "Users"
        assert users.import_name == users.fqn
        assert users.top_level is users
        assert str(users) == users.fqn

    def test_nested_names(self, users: DefinedClass) -> None:
        sort = users.nested("Sort", ClassKind.ENUM)
        assert sort.fqn == "com.example.resource.Users.Sort"
        assert sort.package == "com.example.resource"
        assert sort.simple_name == "Users.Sort"
        assert sort.import_name == "com.example.resource.Users"
        assert sort.top_level is users

    def test_duplicate_top_level_rejected(self, model: CodeModel, users: DefinedClass) -> None:
        with pytest.raises(NameCollisionError, match="com.example.resource.Users"):
            model.define_class("com.example.resource", "Users", ClassKind.ENUM)

    def test_same_name_other_package_allowed(self, model: CodeModel, users: DefinedClass) -> None:
        other = model.define_class("com.example.other", "Users", ClassKind.INTERFACE)
        assert len(model) == 2
        assert model.get("com.example.other.Users") is other

    def test_duplicate_nested_rejected(self, users: DefinedClass) -> None:
        users.nested("Sort", ClassKind.ENUM)
        with pytest.raises(NameCollisionError):
            users.nested("Sort", ClassKind.ENUM)

    def test_nested_named_like_outer_rejected(self, users: DefinedClass) -> None:
        with pytest.raises(NameCollisionError):
            users.nested("Users", ClassKind.ENUM)

    def test_overloads_allowed(self, users: DefinedClass) -> None:
        users.method("find", VOID)
        users.method("find", STRING)
        assert len(users.get_methods("find")) == 2

    def test_enum_constants(self, users: DefinedClass) -> None:
        sort = users.nested("Sort", ClassKind.ENUM)
        sort.enum_constant("asc", "asc")
        with pytest.raises(NameCollisionError):
            sort.enum_constant("asc", "ASC")

    def test_enum_constant_on_interface_rejected(self, users: DefinedClass) -> None:
        with pytest.raises(CodeModelError, match="not an enum"):
            users.enum_constant("A", "a")

    def test_classes_in_declaration_order(self, model: CodeModel) -> None:
        for name in ("B", "A", "C"):
            model.define_class("p", name, ClassKind.INTERFACE)
        assert [c.name for c in model.classes()] == ["B", "A", "C"]


class TestMethodsAndParams:
    def test_params_in_order(self, users: DefinedClass) -> None:
        method = users.method("getUsers", VOID)
        method.param(LONG, "page")
        method.param(STRING, "q")
        assert [(p.name, p.type) for p in method.params] == [("page", LONG), ("q", STRING)]

    def test_duplicate_param_rejected(self, users: DefinedClass) -> None:
        method = users.method("getUsers", VOID)
        method.param(LONG, "page")
        with pytest.raises(NameCollisionError, match="page"):
            method.param(STRING, "page")

    def test_empty_param_name_rejected(self, users: DefinedClass) -> None:
        method = users.method("getUsers", VOID)
        with pytest.raises(CodeModelError):
            method.param(LONG, "")


class TestAnnotations:
    def test_annotate_with_fqn_string(self, users: DefinedClass) -> None:
        annotation = users.annotate("javax.ws.rs.Path").param("value", "users")
        assert annotation.type == ClassRef("javax.ws.rs.Path")
        assert users.find_annotation("javax.ws.rs.Path") is annotation
        assert annotation.params == {"value": "users"}

    def test_annotate_with_defined_class(self, model: CodeModel, users: DefinedClass) -> None:
        patch = model.define_class("com.example.support", "PATCH", ClassKind.ANNOTATION)
        method = users.method("patchUsers", VOID)
        method.annotate(patch)
        assert method.find_annotation("com.example.support.PATCH").type is patch

    def test_find_missing(self, users: DefinedClass) -> None:
        assert users.find_annotation("javax.ws.rs.GET") is None


class TestDescribe:
    def test_structure(self, model: CodeModel, users: DefinedClass) -> None:
        users.annotate("javax.ws.rs.Path").param("value", "users")
        method = users.method("getUsers", VOID)
        method.annotate("javax.ws.rs.GET")
        method.param(LONG_CLASS, "page").annotate("javax.ws.rs.QueryParam").param("value", "page")
        users.nested("Sort", ClassKind.ENUM).enum_constant("asc", "asc")

        (described,) = model.describe()

        assert described["name"] == "com.example.resource.Users"
        assert described["kind"] == "interface"
        assert described["annotations"] == [
            {"type": "javax.ws.rs.Path", "params": {"value": "users"}}
        ]
        assert described["methods"][0]["params"] == [
            {
                "name": "page",
                "type": "java.lang.Long",
                "annotations": [{"type": "javax.ws.rs.QueryParam", "params": {"value": "page"}}],
            }
        ]
        assert described["classes"][0]["constants"] == [("asc", "asc")]
