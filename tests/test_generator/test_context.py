"""Tests for ramlgen.generator.context.GenerationContext."""

from __future__ import annotations

from pathlib import Path

import pytest

from ramlgen.codemodel.model import ClassKind, EnumValue
from ramlgen.codemodel.types import VOID
from ramlgen.exceptions import CodeModelError, ConfigError, NameCollisionError
from ramlgen.generator.context import GenerationContext
from ramlgen.models import Configuration, HTTPMethod


class TestConstruction:
    def test_packages(self, context: GenerationContext) -> None:
        assert context.resource_package == "com.example.api.resource"
        assert context.support_package == "com.example.api.support"

    def test_starts_without_interface(self, context: GenerationContext) -> None:
        assert context.current_resource_interface is None
        assert len(context.code_model) == 0

    def test_empty_base_package_rejected(self, output_dir: Path) -> None:
        with pytest.raises(ConfigError, match="base package name can't be empty"):
            GenerationContext(Configuration(output_directory=output_dir))


class TestResourceInterfaces:
    def test_create_interface(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        assert interface.fqn == "com.example.api.resource.Users"
        assert interface.kind is ClassKind.INTERFACE
        assert context.code_model.get(interface.fqn) is interface

    def test_duplicate_interface_rejected(self, context: GenerationContext) -> None:
        context.create_resource_interface("Users")
        with pytest.raises(NameCollisionError):
            context.create_resource_interface("Users")

    def test_create_method(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        method = context.create_resource_method(interface, "getUsers", VOID)
        assert method.name == "getUsers"
        assert method.return_type == VOID
        assert interface.methods == [method]

    def test_duplicate_method_rejected(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        context.create_resource_method(interface, "getUsers", VOID)
        with pytest.raises(NameCollisionError, match="getUsers"):
            context.create_resource_method(interface, "getUsers", VOID)


class TestResourceEnums:
    def test_create_enum(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        enum = context.create_resource_enum(interface, "Sort", ["asc", "desc"])
        assert enum.fqn == "com.example.api.resource.Users.Sort"
        assert [c.literal for c in enum.enum_constants] == ["asc", "desc"]

    def test_same_values_reuse_enum(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        first = context.create_resource_enum(interface, "Sort", ["asc", "desc"])
        assert context.create_resource_enum(interface, "Sort", ["asc", "desc"]) is first

    def test_conflicting_values_rejected(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        context.create_resource_enum(interface, "Sort", ["asc", "desc"])
        with pytest.raises(NameCollisionError, match="Sort"):
            context.create_resource_enum(interface, "Sort", ["up", "down"])

    def test_same_name_in_other_interface_is_independent(self, context: GenerationContext) -> None:
        users = context.create_resource_interface("Users")
        orders = context.create_resource_interface("Orders")
        a = context.create_resource_enum(users, "Sort", ["asc"])
        b = context.create_resource_enum(orders, "Sort", ["date"])
        assert a is not b
        assert b.fqn == "com.example.api.resource.Orders.Sort"

    def test_enum_named_like_interface_rejected(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Status")
        with pytest.raises(NameCollisionError):
            context.create_resource_enum(interface, "Status", ["on", "off"])

    def test_literals_normalising_to_same_constant_rejected(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        with pytest.raises(NameCollisionError):
            context.create_resource_enum(interface, "Mode", ["a-b", "a_b"])


class TestHttpMethodAnnotations:
    @pytest.mark.parametrize(
        "verb", ["get", "post", "put", "delete", "head", "options"]
    )
    def test_standard_verbs(self, context: GenerationContext, verb: str) -> None:
        interface = context.create_resource_interface("Users")
        method = context.create_resource_method(interface, "m", VOID)
        context.add_http_method_annotation(HTTPMethod(verb), method)
        assert [a.type.fqn for a in method.annotations] == [f"javax.ws.rs.{verb.upper()}"]
        assert len(context.code_model) == 1

    def test_accepts_verb_string(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        method = context.create_resource_method(interface, "m", VOID)
        context.add_http_method_annotation("POST", method)
        assert method.annotations[0].type.fqn == "javax.ws.rs.POST"

    @pytest.mark.parametrize("verb", [HTTPMethod.PATCH, HTTPMethod.TRACE, HTTPMethod.CONNECT])
    def test_extension_verbs_get_support_annotation(
        self, context: GenerationContext, verb: HTTPMethod
    ) -> None:
        interface = context.create_resource_interface("Users")
        method = context.create_resource_method(interface, "m", VOID)
        context.add_http_method_annotation(verb, method)

        fqn = f"com.example.api.support.{verb.name}"
        annotation_type = context.code_model.get(fqn)
        assert annotation_type is not None
        assert annotation_type.kind is ClassKind.ANNOTATION
        assert method.annotations[0].type is annotation_type

        meta = {a.type.fqn: a.params for a in annotation_type.annotations}
        assert meta["javax.ws.rs.HttpMethod"] == {"value": verb.name}
        retention = meta["java.lang.annotation.Retention"]["value"]
        assert isinstance(retention, EnumValue)
        assert (retention.type.fqn, retention.constant) == (
            "java.lang.annotation.RetentionPolicy",
            "RUNTIME",
        )
        target = meta["java.lang.annotation.Target"]["value"]
        assert [v.constant for v in target] == ["METHOD"]

    def test_support_annotation_created_once(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        for name in ("a", "b"):
            method = context.create_resource_method(interface, name, VOID)
            context.add_http_method_annotation(HTTPMethod.PATCH, method)
        fqns = [c.fqn for c in context.code_model.classes()]
        assert fqns == ["com.example.api.resource.Users", "com.example.api.support.PATCH"]

    def test_every_method_is_mapped(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        for verb in HTTPMethod:
            method = context.create_resource_method(interface, verb.value, VOID)
            context.add_http_method_annotation(verb, method)
            assert len(method.annotations) == 1

    def test_unknown_verb_rejected(self, context: GenerationContext) -> None:
        interface = context.create_resource_interface("Users")
        method = context.create_resource_method(interface, "m", VOID)
        with pytest.raises(CodeModelError, match="Unsupported HTTP method: FOO"):
            context.add_http_method_annotation("FOO", method)


class TestGenerate:
    def test_writes_sources(self, context: GenerationContext, output_dir: Path) -> None:
        interface = context.create_resource_interface("Users")
        interface.annotate("javax.ws.rs.Path").param("value", "users")

        paths = context.generate()

        expected = output_dir / "com" / "example" / "api" / "resource" / "Users.java"
        assert paths == [expected]
        source = expected.read_text(encoding="utf-8")
        assert source.startswith("package com.example.api.resource;\n")
        assert '@Path("users")' in source

    def test_requires_output_directory(self) -> None:
        context = GenerationContext(Configuration(base_package_name="com.example"))
        with pytest.raises(ConfigError, match="outputDirectory can't be null"):
            context.generate()
