"""Tests for ramlgen.parser.resolver."""

from __future__ import annotations

from pathlib import Path

import pytest

from ramlgen.exceptions import RamlParseError
from ramlgen.parser.loader import parse_content
from ramlgen.parser.resolver import (
    apply_templates,
    pluralize,
    resource_path_name,
    singularize,
    substitute,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# Traits
# ---------------------------------------------------------------------------


class TestTraits:
    def test_trait_merged_into_method(self) -> None:
        raw = {
            "title": "T",
            "traits": [{"paged": {"queryParameters": {"page": {"type": "integer"}}}}],
            "/users": {"get": {"is": ["paged"]}},
        }
        resolved = apply_templates(raw)
        assert resolved["/users"]["get"]["queryParameters"] == {"page": {"type": "integer"}}

    def test_input_not_mutated(self) -> None:
        raw = {
            "title": "T",
            "traits": [{"paged": {"queryParameters": {"page": {}}}}],
            "/users": {"get": {"is": ["paged"]}},
        }
        apply_templates(raw)
        assert "queryParameters" not in raw["/users"]["get"]

    def test_resource_level_trait_applies_to_every_method(self) -> None:
        raw = {
            "title": "T",
            "traits": [{"secured": {"headers": {"Token": {}}}}],
            "/users": {"is": ["secured"], "get": None, "post": {}},
        }
        resolved = apply_templates(raw)
        assert "Token" in resolved["/users"]["get"]["headers"]
        assert "Token" in resolved["/users"]["post"]["headers"]

    def test_trait_parameters_and_method_name(self) -> None:
        raw = {
            "title": "T",
            "traits": [{
                "paged": {
                    "description": "<<methodName>> on <<resourcePath>>",
                    "queryParameters": {"size": {"maximum": "<<max>>"}},
                }
            }],
            "/users": {"/{id}": {"get": {"is": [{"paged": {"max": 50}}]}}},
        }
        get = apply_templates(raw)["/users"]["/{id}"]["get"]
        assert get["description"] == "get on /users/{id}"
        assert get["queryParameters"]["size"]["maximum"] == "50"

    def test_explicit_value_wins(self) -> None:
        raw = {
            "title": "T",
            "traits": [{"paged": {"queryParameters": {"page": {"type": "integer", "default": 1}}}}],
            "/users": {"get": {"is": ["paged"], "queryParameters": {"page": {"default": 5}}}},
        }
        page = apply_templates(raw)["/users"]["get"]["queryParameters"]["page"]
        assert page == {"default": 5, "type": "integer"}

    def test_earlier_trait_wins(self) -> None:
        raw = {
            "title": "T",
            "traits": [
                {"a": {"description": "from a"}},
                {"b": {"description": "from b"}},
            ],
            "/users": {"is": ["b"], "get": {"is": ["a"]}},
        }
        assert apply_templates(raw)["/users"]["get"]["description"] == "from a"

    def test_unknown_trait(self) -> None:
        raw = {"title": "T", "/users": {"get": {"is": ["missing"]}}}
        with pytest.raises(RamlParseError, match="Unknown trait 'missing'"):
            apply_templates(raw)

    def test_usage_not_copied(self) -> None:
        raw = {
            "title": "T",
            "traits": [{"paged": {"usage": "Apply to collections", "description": "Paged"}}],
            "/users": {"get": {"is": ["paged"]}},
        }
        get = apply_templates(raw)["/users"]["get"]
        assert "usage" not in get
        assert get["description"] == "Paged"


# ---------------------------------------------------------------------------
# Resource types
# ---------------------------------------------------------------------------


class TestResourceTypes:
    def test_fixture(self) -> None:
        raw = parse_content((FIXTURES_DIR / "templates.raml").read_text(encoding="utf-8"))
        resolved = apply_templates(raw)

        books = resolved["/books"]
        assert books["description"] == "Collection of books"
        assert books["post"]["description"] == "Add one of the book items"
        assert "X-Trace-post" in books["post"]["headers"]
        assert books["get"]["queryParameters"]["limit"]["default"] == "20"
        assert "X-Trace-get" in books["get"]["headers"]

        member = books["/{bookId}"]
        assert member["get"]["description"] == "Fetch one book"
        assert "delete" not in member
        assert "delete?" not in member

        authors = resolved["/authors"]
        assert "post" not in authors
        assert "post?" not in authors
        assert "X-Trace-get" not in authors["get"].get("headers", {})

    def test_optional_method_merged_when_declared(self) -> None:
        raw = {
            "title": "T",
            "resourceTypes": [{"item": {"delete?": {"description": "Remove it"}}}],
            "/a": {"type": "item", "delete": None},
            "/b": {"type": "item"},
        }
        resolved = apply_templates(raw)
        assert resolved["/a"]["delete"] == {"description": "Remove it"}
        assert resolved["/b"] == {}

    def test_type_key_removed(self) -> None:
        raw = {"title": "T", "resourceTypes": [{"item": {"get": None}}], "/a": {"type": "item"}}
        assert apply_templates(raw)["/a"] == {"get": {}}

    def test_type_parameters(self) -> None:
        raw = {
            "title": "T",
            "resourceTypes": [{"item": {"description": "A <<kind | !pluralize>> list"}}],
            "/a": {"type": {"item": {"kind": "category"}}},
        }
        assert apply_templates(raw)["/a"]["description"] == "A categories list"

    def test_type_brings_traits(self) -> None:
        raw = {
            "title": "T",
            "traits": [{"paged": {"queryParameters": {"page": {}}}}],
            "resourceTypes": [{"collection": {"get": {"is": ["paged"]}}}],
            "/a": {"type": "collection", "get": {"description": "List"}},
        }
        get = apply_templates(raw)["/a"]["get"]
        assert get["description"] == "List"
        assert get["is"] == ["paged"]
        assert "page" in get["queryParameters"]

    def test_is_lists_concatenated(self) -> None:
        raw = {
            "title": "T",
            "traits": [{"a": {}}, {"b": {}}],
            "resourceTypes": [{"t": {"get": {"is": ["a", "b"]}}}],
            "/x": {"type": "t", "get": {"is": ["b"]}},
        }
        assert apply_templates(raw)["/x"]["get"]["is"] == ["b", "a"]

    def test_inheritance(self) -> None:
        raw = {
            "title": "T",
            "resourceTypes": [
                {"base": {"description": "Base", "get?": {"description": "Read"}}},
                {"child": {"type": "base", "post": None}},
            ],
            "/a": {"type": "child", "get": None},
        }
        resolved = apply_templates(raw)["/a"]
        assert resolved == {
            "get": {"description": "Read"},
            "post": {},
            "description": "Base",
        }

    def test_circular_inheritance(self) -> None:
        raw = {
            "title": "T",
            "resourceTypes": [{"a": {"type": "b"}}, {"b": {"type": "a"}}],
            "/x": {"type": "a"},
        }
        with pytest.raises(RamlParseError, match="Circular resource type inheritance: a -> b -> a"):
            apply_templates(raw)

    def test_unknown_resource_type(self) -> None:
        with pytest.raises(RamlParseError, match="Unknown resource type 'nope'"):
            apply_templates({"title": "T", "/x": {"type": "nope"}})


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


class TestSubstitute:
    def test_keys_and_values(self) -> None:
        result = substitute({"X-<<name>>": ["<<name>>-id", 3]}, {"name": "user"})
        assert result == {"X-user": ["user-id", 3]}

    def test_missing_parameter(self) -> None:
        with pytest.raises(RamlParseError, match="Value was not provided for parameter: size"):
            substitute("<<size>>", {})

    def test_unknown_transform(self) -> None:
        with pytest.raises(RamlParseError, match="Unknown parameter transform: !upper"):
            substitute("<<name | !upper>>", {"name": "x"})

    def test_whitespace_tolerated(self) -> None:
        assert substitute("<< name|!singularize >>", {"name": "users"}) == "user"


class TestInflection:
    @pytest.mark.parametrize(
        ("plural", "singular"),
        [("users", "user"), ("categories", "category"), ("boxes", "box"), ("status", "statu"),
         ("address", "address"), ("data", "data")],
    )
    def test_singularize(self, plural: str, singular: str) -> None:
        assert singularize(plural) == singular

    @pytest.mark.parametrize(
        ("singular", "plural"),
        [("user", "users"), ("category", "categories"), ("day", "days"), ("box", "boxes"),
         ("match", "matches")],
    )
    def test_pluralize(self, singular: str, plural: str) -> None:
        assert pluralize(singular) == plural

    @pytest.mark.parametrize(
        ("uri", "name"),
        [("/users", "users"), ("/users/{id}", "users"), ("/a/b", "b"), ("/{id}", "")],
    )
    def test_resource_path_name(self, uri: str, name: str) -> None:
        assert resource_path_name(uri) == name
