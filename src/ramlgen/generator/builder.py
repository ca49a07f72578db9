"""Flatten a RAML resource tree into JAX-RS resource interfaces.

Each top-level resource produces one public interface annotated with
``@Path``. Every action found in that resource's subtree, however deep,
becomes a method of that same interface:

* the method name comes from the verb and the action's absolute URI
  (:func:`~ramlgen.generator.names.to_method_name`);
* the method ``@Path`` is the action's URI relative to the interface path;
* URI parameters of the owning resource, then headers, then query
  parameters, become annotated method parameters in declaration order.

Walk order is deterministic: top-level resources, then each resource's
actions before its children, all in declaration order. The same document
and configuration always produce the same class model.
"""

from __future__ import annotations

from typing import Optional

from ramlgen.codemodel.model import DefinedClass, JMethod
from ramlgen.codemodel.types import VOID
from ramlgen.generator.constraints import add_constraint_annotations
from ramlgen.generator.context import GenerationContext
from ramlgen.generator.names import to_interface_name, to_method_name, to_variable_name
from ramlgen.generator.types import infer_type
from ramlgen.models import AbstractParam, Action, ParameterLocation, RamlDocument, Resource

PATH = "javax.ws.rs.Path"
DEFAULT_VALUE = "javax.ws.rs.DefaultValue"

PARAM_ANNOTATIONS: dict[ParameterLocation, str] = {
    ParameterLocation.PATH: "javax.ws.rs.PathParam",
    ParameterLocation.HEADER: "javax.ws.rs.HeaderParam",
    ParameterLocation.QUERY: "javax.ws.rs.QueryParam",
}

EXAMPLE_SEPARATOR = " e.g. "


def generate(document: RamlDocument, context: GenerationContext) -> None:
    """Build one resource interface per top-level resource of *document*.

    Raises:
        CodeModelError: If a class model element cannot be created.
        NameCollisionError: If two generated members share a name.
    """
    for resource in document.resources.values():
        create_resource_interface(resource, context)


def create_resource_interface(resource: Resource, context: GenerationContext) -> DefinedClass:
    """Create the interface for top-level *resource* and fill it from its subtree."""
    name = to_interface_name(resource.display_name, resource.relative_uri)
    interface = context.create_resource_interface(name)
    context.current_resource_interface = interface

    interface_path = resource.relative_uri.strip("/")
    interface.annotate(PATH).param("value", interface_path)
    if _not_blank(resource.description):
        interface.javadoc.add(resource.description)

    context.diagnostics.debug(f"Interface {interface.fqn} for {resource.uri}")
    _add_resource_methods(resource, interface, interface_path, context)
    return interface


def _add_resource_methods(
    resource: Resource,
    interface: DefinedClass,
    interface_path: str,
    context: GenerationContext,
) -> None:
    for action in resource.actions.values():
        _add_resource_method(action, resource, interface, interface_path, context)
    for child in resource.resources.values():
        _add_resource_methods(child, interface, interface_path, context)


def _add_resource_method(
    action: Action,
    resource: Resource,
    interface: DefinedClass,
    interface_path: str,
    context: GenerationContext,
) -> JMethod:
    method_name = to_method_name(action.method.value, action.resource_uri)
    method = context.create_resource_method(interface, method_name, VOID)
    context.add_http_method_annotation(action.method, method)
    method.annotate(PATH).param("value", relative_path(action.resource_uri, interface_path))

    if _not_blank(action.description):
        method.javadoc.add(action.description)

    groups = (
        (ParameterLocation.PATH, resource.uri_parameters),
        (ParameterLocation.HEADER, action.headers),
        (ParameterLocation.QUERY, action.query_parameters),
    )
    for location, params in groups:
        for key, param in params.items():
            _add_parameter(key, param, location, method, interface, context)
    return method


def relative_path(resource_uri: str, interface_path: str) -> str:
    """Path of an action relative to its interface's ``@Path``.

    Example::

        >>> relative_path("/users/{id}/orders", "users")
        '{id}/orders'
        >>> relative_path("/users", "users")
        ''
    """
    uri = resource_uri.lstrip("/")
    if not interface_path:
        return uri
    prefix = interface_path + "/"
    return uri[len(prefix):] if uri.startswith(prefix) else ""


def _add_parameter(
    key: str,
    param: AbstractParam,
    location: ParameterLocation,
    method: JMethod,
    interface: DefinedClass,
    context: GenerationContext,
) -> None:
    argument_name = to_variable_name(key)
    if not argument_name:
        argument_name = f"param{len(method.params) + 1}"
        context.diagnostics.warning(
            f"{location.value.capitalize()} parameter '{key}' of {method.name} has no "
            f"usable identifier, using '{argument_name}'"
        )

    param_type = infer_type(param, argument_name, context, interface)
    jparam = method.param(param_type, argument_name)
    jparam.annotate(PARAM_ANNOTATIONS[location]).param("value", key)

    if param.default is not None:
        jparam.annotate(DEFAULT_VALUE).param("value", param.default)
    if context.configuration.use_jsr303_annotations:
        add_constraint_annotations(param, jparam)

    method.javadoc.add_param(argument_name, _param_doc(param))


def _param_doc(param: AbstractParam) -> str:
    text = param.description or ""
    if _not_blank(param.example):
        text = (text + EXAMPLE_SEPARATOR + param.example).lstrip()
    return text


def _not_blank(text: Optional[str]) -> bool:
    return bool(text and text.strip())
