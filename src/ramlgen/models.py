"""Canonical Pydantic models shared across all ramlgen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the project's
``ramlgen.json`` and resolved by :mod:`ramlgen.config`:
    :class:`Configuration`.

**Description tree models** -- produced by the RAML parser and consumed,
read-only, by the generator:
    :class:`HTTPMethod`, :class:`ParamType`, :class:`ParameterLocation`,
    :class:`AbstractParam`, :class:`Action`, :class:`Resource`, and
    :class:`RamlDocument`.

**Validation models** -- problems reported by the RAML validator:
    :class:`ValidationResult`.

All mappings in the description tree are plain ``dict`` objects and keep the
declaration order of the source document; the generator relies on that order.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


# --- Configuration ---


class Configuration(BaseModel):
    """Settings for one generation run.

    Loaded from ``./ramlgen.json``, environment variables and CLI flags by
    :func:`~ramlgen.config.resolve_configuration`, then checked by
    :func:`~ramlgen.config.validate_configuration` before any generation
    work starts.

    Example::

        Configuration(
            output_directory=Path("src/main/java"),
            base_package_name="com.example.api",
        )
    """

    output_directory: Optional[Path] = Field(
        default=None, description="Pre-existing directory receiving the .java files"
    )
    base_package_name: str = Field(
        default="", description="Java package under which all types are generated"
    )
    use_jsr303_annotations: bool = Field(
        default=False, description="Emit Bean Validation constraints on parameters"
    )
    source_encoding: str = Field(
        default="utf-8", description="Encoding of the RAML file and generated sources"
    )


# --- Description Tree Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods a RAML 0.8 resource may declare as actions.

    The set is closed: the generator maps every member to a JAX-RS
    annotation (see :mod:`ramlgen.generator.context`).
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    HEAD = "head"
    PATCH = "patch"
    OPTIONS = "options"
    TRACE = "trace"
    CONNECT = "connect"


class ParamType(str, enum.Enum):
    """Primitive types a RAML named parameter may declare."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    DATE = "date"
    BOOLEAN = "boolean"
    FILE = "file"


class ParameterLocation(str, enum.Enum):
    """Where a generated parameter is bound from in the HTTP request."""

    PATH = "path"
    HEADER = "header"
    QUERY = "query"


class AbstractParam(BaseModel):
    """A RAML named parameter (URI, header or query parameter).

    ``type`` keeps the raw declared kind so that the type inference engine
    can warn about kinds it does not know; ``None`` means the kind was not
    declared. ``default`` and ``example`` are normalised to strings by the
    extractor since they end up in Java annotations and javadoc.
    """

    display_name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    required: bool = False
    repeat: bool = False
    default: Optional[str] = None
    example: Optional[str] = None
    enum_values: Optional[list[str]] = None
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None


class Action(BaseModel):
    """One HTTP method declared on a resource.

    ``resource_uri`` is the absolute URI of the owning resource, which is
    also the resource whose URI parameters the action binds.
    """

    method: HTTPMethod
    resource_uri: str
    description: Optional[str] = None
    headers: dict[str, AbstractParam] = Field(default_factory=dict)
    query_parameters: dict[str, AbstractParam] = Field(default_factory=dict)


class Resource(BaseModel):
    """A node of the RAML resource tree.

    ``relative_uri`` is the key the resource was declared under (e.g.
    ``/{id}``); ``uri`` is the absolute URI obtained by concatenating the
    relative URIs of every ancestor (e.g. ``/users/{id}``).
    """

    relative_uri: str
    uri: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    uri_parameters: dict[str, AbstractParam] = Field(default_factory=dict)
    actions: dict[str, Action] = Field(default_factory=dict)
    resources: dict[str, Resource] = Field(default_factory=dict)


class RamlDocument(BaseModel):
    """Complete parsed representation of a RAML description.

    Produced by :func:`~ramlgen.parser.parse_raml` and consumed by
    :func:`~ramlgen.generator.builder.generate`. Only ``resources`` drives
    generation; the remaining fields feed ``ramlgen inspect info``.
    """

    title: str
    version: Optional[str] = None
    base_uri: Optional[str] = None
    media_type: Optional[str] = None
    resources: dict[str, Resource] = Field(default_factory=dict)
    raw: Optional[dict[str, Any]] = Field(
        default=None, description="Template-resolved document for reference"
    )


# --- Validation ---


class ValidationResult(BaseModel):
    """A problem found in a RAML document by :func:`~ramlgen.parser.validator.validate_raml`.

    ``path`` locates the offending node, e.g. ``/users/{id} get queryParameters.page``.
    """

    path: str = ""
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message
