"""Extract a :class:`~ramlgen.models.RamlDocument` from a resolved RAML dict.

This is the final stage of the parser pipeline. It walks the resource tree
of a document whose templates were applied by
:func:`~ramlgen.parser.resolver.apply_templates` and builds the immutable
description tree the generator consumes.

Normalisations performed here:

* absolute resource URIs are computed from the chain of relative URIs;
* URI parameters default to ``required: true``, header and query
  parameters to ``required: false``;
* ``default``, ``example`` and ``enum`` values are converted to strings
  (``true`` rather than ``True`` for booleans);
* a parameter declared with multiple types keeps its first declaration;
* a placeholder of a relative URI with no matching ``uriParameters``
  entry gets an implicit required string parameter, appended after the
  declared ones.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import ValidationError

from ramlgen.exceptions import RamlParseError
from ramlgen.models import AbstractParam, Action, HTTPMethod, RamlDocument, Resource
from ramlgen.parser.validator import VERBS, is_resource_key

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

_TEXT_FIELDS = {
    "displayName": "display_name",
    "description": "description",
    "pattern": "pattern",
    "default": "default",
    "example": "example",
}
_PARAM_FIELDS = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "minimum": "minimum",
    "maximum": "maximum",
    "repeat": "repeat",
    "required": "required",
}


def extract_document(raw: dict[str, Any]) -> RamlDocument:
    """Build the description tree of a resolved RAML document.

    Args:
        raw: The template-resolved document.

    Returns:
        The :class:`~ramlgen.models.RamlDocument`, with ``raw`` set to
        *raw*.

    Raises:
        RamlParseError: If a node does not fit the description tree.
    """
    try:
        return RamlDocument(
            title=_text(raw.get("title")) or "",
            version=_text(raw.get("version")),
            base_uri=_text(raw.get("baseUri")),
            media_type=_text(raw.get("mediaType")),
            resources=_extract_resources(raw, parent_uri=""),
            raw=raw,
        )
    except ValidationError as exc:
        raise RamlParseError(f"Invalid RAML definition:\n{exc}") from exc


def _extract_resources(node: dict[str, Any], parent_uri: str) -> dict[str, Resource]:
    return {
        key: _extract_resource(key, value or {}, parent_uri)
        for key, value in node.items()
        if is_resource_key(key)
    }


def _extract_resource(relative_uri: str, data: dict[str, Any], parent_uri: str) -> Resource:
    uri = parent_uri + relative_uri
    if not isinstance(data, dict):
        raise RamlParseError(f"Invalid RAML definition:\n{uri}: resource must be a mapping")

    uri_parameters = extract_params(data.get("uriParameters"), required_default=True)
    for name in _PLACEHOLDER_RE.findall(relative_uri):
        if name not in uri_parameters:
            uri_parameters[name] = AbstractParam(required=True)

    actions = {}
    for key, value in data.items():
        if key in VERBS:
            actions[key] = _extract_action(HTTPMethod(key), value or {}, uri)

    return Resource(
        relative_uri=relative_uri,
        uri=uri,
        display_name=_text(data.get("displayName")),
        description=_text(data.get("description")),
        uri_parameters=uri_parameters,
        actions=actions,
        resources=_extract_resources(data, uri),
    )


def _extract_action(method: HTTPMethod, data: dict[str, Any], resource_uri: str) -> Action:
    return Action(
        method=method,
        resource_uri=resource_uri,
        description=_text(data.get("description")),
        headers=extract_params(data.get("headers"), required_default=False),
        query_parameters=extract_params(data.get("queryParameters"), required_default=False),
    )


def extract_params(node: Any, required_default: bool) -> dict[str, AbstractParam]:
    """Extract a mapping of named parameters, keeping declaration order."""
    if not node:
        return {}
    return {
        str(name): extract_param(data, required_default) for name, data in node.items()
    }


def extract_param(data: Any, required_default: bool = False) -> AbstractParam:
    """Extract a single named parameter declaration.

    Example::

        >>> extract_param({"type": "integer", "default": 10}).default
        '10'
        >>> extract_param(None, required_default=True).required
        True
    """
    if isinstance(data, list):
        data = next((item for item in data if isinstance(item, dict)), None)
    if not data:
        return AbstractParam(required=required_default)

    fields: dict[str, Any] = {"required": required_default}
    for key, field_name in _PARAM_FIELDS.items():
        if data.get(key) is not None:
            fields[field_name] = data[key]
    if data.get("type") is not None:
        fields["type"] = str(data["type"])
    for key, field_name in _TEXT_FIELDS.items():
        if data.get(key) is not None:
            fields[field_name] = _text(data[key])
    if data.get("enum") is not None:
        fields["enum_values"] = [_text(v) for v in data["enum"]]
    return AbstractParam(**fields)


def _text(value: Any) -> Optional[str]:
    """Render a YAML scalar the way it reads in the document."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
