"""Apply RAML 0.8 resource types and traits.

Resource types (``type:``) and traits (``is:``) are templates declared at
the document root and applied to resources and methods. This module
performs a deep-copy traversal of the document and merges every applied
template into the node that references it, so that later stages only
see plain resources and methods.

Merge rules:

* values declared explicitly on a node win over template values;
* mappings are merged recursively, and an empty node (``get:``) takes
  the template's content;
* ``is`` lists are concatenated, explicit entries first;
* optional methods (``get?:``) of a resource type only apply when the
  resource declares that method;
* traits are applied in order (method-level ``is`` first, then the
  resource's), and an earlier trait wins over a later one;
* a resource type may itself have a ``type``; cycles are rejected.

Template parameters (``<<name>>``) are substituted in keys and values.
``resourcePath``, ``resourcePathName`` and, for traits, ``methodName`` are
always available; ``!singularize`` and ``!pluralize`` transforms are
supported.

The single public function is :func:`apply_templates`.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Optional

from ramlgen.exceptions import RamlParseError
from ramlgen.parser.validator import VERBS, is_resource_key, named_templates, template_reference

_PARAM_RE = re.compile(r"<<\s*([^<>|\s]+)\s*(?:\|\s*!(\w+)\s*)?>>")

# Keys describing a template itself rather than the node it applies to.
_TEMPLATE_ONLY_KEYS = ("usage", "displayName")


def apply_templates(raw: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *raw* with every resource type and trait applied.

    The ``traits`` and ``resourceTypes`` declarations themselves are kept.

    Raises:
        RamlParseError: If a referenced template does not exist, a template
            parameter has no value, or resource types inherit in a cycle.

    Example::

        raw = parse_content(text)
        resolved = apply_templates(raw)
        # resolved["/users"]["get"] now holds the queryParameters of the
        # "paged" trait it references.
    """
    root = copy.deepcopy(raw)
    resolver = _Resolver(
        traits=named_templates(root.get("traits")),
        resource_types=named_templates(root.get("resourceTypes")),
    )
    for key, value in list(root.items()):
        if is_resource_key(key):
            root[key] = resolver.resource(value, key, parent_uri="")
    return root


class _Resolver:
    def __init__(self, traits: dict[str, Any], resource_types: dict[str, Any]) -> None:
        self.traits = traits
        self.resource_types = resource_types

    def resource(self, value: Any, relative_uri: str, parent_uri: str) -> dict[str, Any]:
        resource = dict(value or {})
        uri = parent_uri + relative_uri
        params = {"resourcePath": uri, "resourcePathName": resource_path_name(uri)}

        if resource.get("type") is not None:
            resource = self._merge_resource_type(resource, params, seen=())

        resource_traits = _as_list(resource.get("is"))
        for key, child in list(resource.items()):
            if key in VERBS:
                resource[key] = self._apply_traits(child, key, resource_traits, params)
            elif is_resource_key(key):
                resource[key] = self.resource(child, key, uri)
        return resource

    def _merge_resource_type(
        self,
        resource: dict[str, Any],
        params: dict[str, str],
        seen: tuple[str, ...],
    ) -> dict[str, Any]:
        name, args = template_reference(resource["type"])
        if name in seen:
            chain = " -> ".join(seen + (name,))
            raise RamlParseError(f"Circular resource type inheritance: {chain}")
        template = self.resource_types.get(name)
        if not isinstance(template, dict):
            raise RamlParseError(f"Unknown resource type '{name}'")

        body = _template_body(template, {**params, **args})
        if body.get("type") is not None:
            body = self._merge_resource_type(body, params, seen + (name,))

        merged = {key: value for key, value in resource.items() if key != "type"}
        for key, value in body.items():
            if key == "type":
                continue
            if isinstance(key, str) and key.endswith("?"):
                # optional method: only merged into a method the node declares
                for target in (key[:-1], key):
                    if target in merged:
                        merged[target] = _deep_merge(merged[target], value)
                        break
                else:
                    if seen:
                        # merging into a derived resource type: stays optional
                        merged[key] = value
                continue
            merged[key] = _deep_merge(merged[key], value, key) if key in merged else value
        return merged

    def _apply_traits(
        self,
        value: Any,
        method_name: str,
        resource_traits: list[Any],
        params: dict[str, str],
    ) -> dict[str, Any]:
        action = dict(value or {})
        refs = _as_list(action.get("is"))
        refs += [ref for ref in resource_traits if ref not in refs]

        for ref in refs:
            name, args = template_reference(ref)
            template = self.traits.get(name)
            if not isinstance(template, dict):
                raise RamlParseError(f"Unknown trait '{name}'")
            body = _template_body(template, {**params, "methodName": method_name, **args})
            action = _deep_merge(action, body)
        return action


def _template_body(template: dict[str, Any], params: dict[str, Any]) -> dict[str, Any]:
    body = copy.deepcopy(template)
    for key in _TEMPLATE_ONLY_KEYS:
        body.pop(key, None)
    return substitute(body, params)


def _deep_merge(explicit: Any, inherited: Any, key: Optional[str] = None) -> Any:
    """Merge *inherited* template content into *explicit* node content."""
    if explicit is None:
        return copy.deepcopy(inherited)
    if isinstance(explicit, dict) and isinstance(inherited, dict):
        merged = dict(explicit)
        for child_key, value in inherited.items():
            if child_key in merged:
                merged[child_key] = _deep_merge(merged[child_key], value, child_key)
            else:
                merged[child_key] = copy.deepcopy(value)
        return merged
    if key == "is" and isinstance(explicit, list) and isinstance(inherited, list):
        return explicit + [ref for ref in inherited if ref not in explicit]
    return explicit


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return list(value) if isinstance(value, list) else [value]


# --- Template parameters ---


def resource_path_name(uri: str) -> str:
    """Rightmost segment of *uri* that holds no URI parameter.

    Example::

        >>> resource_path_name("/users/{userId}")
        'users'
    """
    segments = [s for s in uri.split("/") if s and "{" not in s]
    return segments[-1] if segments else ""


def substitute(value: Any, params: dict[str, Any]) -> Any:
    """Replace ``<<name>>`` placeholders in every key and string of *value*.

    Raises:
        RamlParseError: If a placeholder has no value or names an unknown
            transform.
    """
    if isinstance(value, dict):
        return {substitute(k, params): substitute(v, params) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute(item, params) for item in value]
    if isinstance(value, str) and "<<" in value:
        return _PARAM_RE.sub(lambda m: _param_value(m, params), value)
    return value


def _param_value(match: re.Match[str], params: dict[str, Any]) -> str:
    name, transform = match.group(1), match.group(2)
    if name not in params:
        raise RamlParseError(f"Value was not provided for parameter: {name}")
    text = str(params[name])
    if transform is None:
        return text
    if transform == "singularize":
        return singularize(text)
    if transform == "pluralize":
        return pluralize(text)
    raise RamlParseError(f"Unknown parameter transform: !{transform}")


def singularize(word: str) -> str:
    lower = word.lower()
    if lower.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if lower.endswith(("ses", "xes", "zes", "ches", "shes")):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return word[:-1]
    return word


def pluralize(word: str) -> str:
    lower = word.lower()
    if lower.endswith("y") and len(word) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"
