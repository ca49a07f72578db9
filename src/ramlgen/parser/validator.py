"""Structural validation of a raw RAML 0.8 document.

:func:`validate_raml` walks the dictionary produced by
:func:`~ramlgen.parser.loader.parse_content` and reports every problem it
finds instead of stopping at the first one, so that a user can fix a
document in one pass. Checked:

* ``title`` is present and not empty;
* root, resource, action and named parameter keys are known RAML 0.8 keys;
* resources, actions and parameter declarations are mappings;
* ``type`` and ``is`` reference declared resource types and traits;
* named parameter facets have the right shape (``required`` is a boolean,
  ``minLength`` a non-negative integer, ``enum`` a non-empty list ...).

Parameter ``type`` values are only checked to be strings: kinds the
generator does not know are reported as warnings during type inference.
Template bodies (traits, resource types) are only checked to be mappings;
their content is checked once applied, by the extractor.
"""

from __future__ import annotations

from typing import Any

from ramlgen.models import HTTPMethod, ValidationResult

VERBS = frozenset(m.value for m in HTTPMethod)

ROOT_KEYS = frozenset({
    "title", "version", "baseUri", "baseUriParameters", "uriParameters",
    "protocols", "mediaType", "schemas", "securitySchemes", "securedBy",
    "documentation", "traits", "resourceTypes",
})
RESOURCE_KEYS = frozenset({
    "displayName", "description", "uriParameters", "baseUriParameters",
    "type", "is", "securedBy",
})
ACTION_KEYS = frozenset({
    "description", "headers", "queryParameters", "body", "responses",
    "protocols", "is", "securedBy", "baseUriParameters",
})
PARAM_KEYS = frozenset({
    "displayName", "description", "type", "enum", "pattern", "minLength",
    "maxLength", "minimum", "maximum", "example", "repeat", "required",
    "default",
})


def named_templates(value: Any) -> dict[str, Any]:
    """Normalise a ``traits`` or ``resourceTypes`` declaration to a dict.

    RAML 0.8 declares templates as a sequence of single-key mappings; a
    plain mapping is accepted too.
    """
    if isinstance(value, dict):
        return dict(value)
    result: dict[str, Any] = {}
    if isinstance(value, list):
        for item in value:
            if isinstance(item, dict):
                result.update(item)
    return result


def template_reference(ref: Any) -> tuple[str, dict[str, Any]]:
    """Split a ``type``/``is`` entry into template name and parameters.

    Example::

        >>> template_reference({"paged": {"maxSize": 50}})
        ('paged', {'maxSize': 50})
        >>> template_reference("secured")
        ('secured', {})
    """
    if isinstance(ref, dict) and len(ref) == 1:
        ((name, params),) = ref.items()
        return str(name), dict(params) if isinstance(params, dict) else {}
    return str(ref), {}


def is_resource_key(key: Any) -> bool:
    return isinstance(key, str) and key.startswith("/")


def validate_raml(raw: dict[str, Any]) -> list[ValidationResult]:
    """Validate the structure of *raw*.

    Returns:
        Every problem found, in document order. Empty when *raw* is valid.
    """
    return _Validator(raw).run()


class _Validator:
    def __init__(self, raw: dict[str, Any]) -> None:
        self.raw = raw
        self.results: list[ValidationResult] = []
        self.traits = named_templates(raw.get("traits"))
        self.resource_types = named_templates(raw.get("resourceTypes"))

    def error(self, path: str, message: str) -> None:
        self.results.append(ValidationResult(path=path, message=message))

    def run(self) -> list[ValidationResult]:
        title = self.raw.get("title")
        if title is None or (isinstance(title, str) and not title.strip()):
            self.error("", "title is required")
        elif isinstance(title, (dict, list)):
            self.error("title", "must be a scalar")

        base_uri = self.raw.get("baseUri")
        if base_uri is not None and not isinstance(base_uri, str):
            self.error("baseUri", "must be a string")

        self._templates("traits", self.raw.get("traits"))
        self._templates("resourceTypes", self.raw.get("resourceTypes"))
        for key in ("baseUriParameters", "uriParameters"):
            if key in self.raw:
                self._named_params(self.raw[key], key)

        for key, value in self.raw.items():
            if is_resource_key(key):
                self._resource(value, key)
            elif key not in ROOT_KEYS:
                self.error(str(key), "unknown key")
        return self.results

    # ------------------------------------------------------------------ #
    # Templates
    # ------------------------------------------------------------------ #

    def _templates(self, key: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, list):
            for item in value:
                if not isinstance(item, dict):
                    self.error(key, "each entry must be a mapping")
        elif not isinstance(value, dict):
            self.error(key, "must be a sequence of mappings")
            return
        for name, body in named_templates(value).items():
            if not isinstance(body, dict):
                self.error(f"{key}.{name}", "must be a mapping")

    def _template_ref(self, ref: Any, templates: dict[str, Any], kind: str, path: str) -> None:
        if isinstance(ref, dict):
            if len(ref) != 1:
                self.error(path, f"a {kind} reference must have exactly one key")
                return
            params = next(iter(ref.values()))
            if params is not None and not isinstance(params, dict):
                self.error(path, f"parameters of {kind} '{next(iter(ref))}' must be a mapping")
        elif not isinstance(ref, str):
            self.error(path, f"invalid {kind} reference")
            return
        name, _ = template_reference(ref)
        if name not in templates:
            self.error(path, f"unknown {kind} '{name}'")

    def _trait_refs(self, value: Any, path: str) -> None:
        refs = value if isinstance(value, list) else [value]
        for ref in refs:
            self._template_ref(ref, self.traits, "trait", path)

    # ------------------------------------------------------------------ #
    # Resources and actions
    # ------------------------------------------------------------------ #

    def _resource(self, value: Any, path: str) -> None:
        if value is None:
            return
        if not isinstance(value, dict):
            self.error(path, "resource must be a mapping")
            return

        for key, child in value.items():
            if is_resource_key(key):
                self._resource(child, path + key)
            elif key in VERBS:
                self._action(child, f"{path} {key}")
            elif key in ("uriParameters", "baseUriParameters"):
                self._named_params(child, f"{path} {key}")
            elif key == "type":
                self._template_ref(child, self.resource_types, "resource type", f"{path} type")
            elif key == "is":
                self._trait_refs(child, f"{path} is")
            elif key in ("displayName", "description"):
                self._scalar(child, f"{path} {key}")
            elif key not in RESOURCE_KEYS:
                if isinstance(key, str) and key.rstrip("?") in VERBS:
                    self.error(f"{path} {key}", "optional methods are only allowed in resource types")
                else:
                    self.error(f"{path} {key}", "unknown key")

    def _action(self, value: Any, path: str) -> None:
        if value is None:
            return
        if not isinstance(value, dict):
            self.error(path, "method must be a mapping")
            return

        for key, child in value.items():
            if key in ("headers", "queryParameters", "baseUriParameters"):
                self._named_params(child, f"{path} {key}")
            elif key == "is":
                self._trait_refs(child, f"{path} is")
            elif key == "description":
                self._scalar(child, f"{path} {key}")
            elif key not in ACTION_KEYS:
                self.error(f"{path} {key}", "unknown key")

    # ------------------------------------------------------------------ #
    # Named parameters
    # ------------------------------------------------------------------ #

    def _named_params(self, value: Any, path: str) -> None:
        if value is None:
            return
        if not isinstance(value, dict):
            self.error(path, "must be a mapping of named parameters")
            return
        for name, param in value.items():
            self._named_param(param, f"{path}.{name}")

    def _named_param(self, param: Any, path: str) -> None:
        if param is None:
            return
        if isinstance(param, list):
            # multiple types: each alternative is a full declaration
            for alternative in param:
                self._named_param(alternative, path)
            return
        if not isinstance(param, dict):
            self.error(path, "named parameter must be a mapping")
            return

        for key, facet in param.items():
            facet_path = f"{path}.{key}"
            if key not in PARAM_KEYS:
                self.error(facet_path, "unknown key")
            elif key in ("required", "repeat"):
                if not isinstance(facet, bool):
                    self.error(facet_path, "must be a boolean")
            elif key in ("minLength", "maxLength"):
                if not _is_int(facet) or facet < 0:
                    self.error(facet_path, "must be a non-negative integer")
            elif key in ("minimum", "maximum"):
                if not _is_number(facet):
                    self.error(facet_path, "must be a number")
            elif key == "enum":
                if not isinstance(facet, list) or not facet:
                    self.error(facet_path, "must be a non-empty sequence")
                elif any(isinstance(v, (dict, list)) or v is None for v in facet):
                    self.error(facet_path, "values must be scalars")
            elif key in ("type", "pattern"):
                if not isinstance(facet, str):
                    self.error(facet_path, "must be a string")
            else:
                self._scalar(facet, facet_path)

    def _scalar(self, value: Any, path: str) -> None:
        if isinstance(value, (dict, list)):
            self.error(path, "must be a scalar")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
