"""Turn arbitrary human-authored strings into legal Java identifiers.

RAML display names, URIs and parameter keys may contain any character. The
functions here map them onto Java identifiers deterministically:

* :func:`to_type_name` -- ``"user accounts"`` -> ``"UserAccounts"``.
* :func:`to_variable_name` -- ``"X-Request-Id"`` -> ``"xRequestId"``,
  ``"default"`` -> ``"$default"``.
* :func:`to_interface_name` -- a resource's interface name, never empty.
* :func:`to_method_name` -- ``("get", "/users/{id}")`` -> ``"getUsersById"``.
* :func:`to_enum_constant_name` -- an enumeration literal as a constant name.

Every function is total and idempotent on its own output: normalising an
identifier it produced returns the same identifier.
"""

from __future__ import annotations

import re

DIGIT_MARKER = "_"
"""Prepended to identifiers whose first character would be a digit."""

KEYWORD_MARKER = "$"
"""Prepended to variable names that collide with a Java reserved word."""

DEFAULT_INTERFACE_NAME = "Root"
"""Interface name used when a resource's name normalises to nothing."""

JAVA_KEYWORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "false", "final", "finally", "float", "for", "goto", "if",
    "implements", "import", "instanceof", "int", "interface", "long", "native",
    "new", "null", "package", "private", "protected", "public", "return",
    "short", "static", "strictfp", "super", "switch", "synchronized", "this",
    "throw", "throws", "transient", "true", "try", "void", "volatile", "while",
})

# ASCII only: Java's \W, unlike Python's, does not treat accented letters as word characters.
_SEPARATOR_RE = re.compile(r"[\W_]+", re.ASCII)


def to_type_name(text: str) -> str:
    """Convert *text* to an UpperCamelCase Java type name.

    Runs of non-alphanumeric characters become word breaks, the first letter
    of every word is upper-cased (the rest of the word is left as is), and
    the breaks are removed. A result starting with a digit gets
    :data:`DIGIT_MARKER`.

    Args:
        text: Any string.

    Returns:
        A string of ASCII letters and digits, possibly prefixed with
        :data:`DIGIT_MARKER`, or ``""`` when *text* has no alphanumeric
        character.

    Example::

        >>> to_type_name("/users/{userId}")
        'UsersUserId'
        >>> to_type_name("2fa codes")
        '_2faCodes'
    """
    words = _SEPARATOR_RE.sub(" ", text).split()
    name = "".join(word[:1].upper() + word[1:] for word in words)
    if name[:1].isdigit():
        name = DIGIT_MARKER + name
    return name


def to_variable_name(text: str) -> str:
    """Convert *text* to a lowerCamelCase Java variable name.

    Reserved words are escaped with :data:`KEYWORD_MARKER` rather than
    renamed, so ``"class"`` becomes ``"$class"``.

    Returns:
        The variable name, or ``""`` when *text* has no alphanumeric
        character. Callers decide how to handle the empty case.
    """
    type_name = to_type_name(text)
    name = type_name[:1].lower() + type_name[1:]
    return KEYWORD_MARKER + name if name in JAVA_KEYWORDS else name


def to_interface_name(display_name: str | None, relative_uri: str) -> str:
    """Name the interface generated for a top-level resource.

    Uses the display name when it is not blank, otherwise the relative URI,
    and falls back to :data:`DEFAULT_INTERFACE_NAME`.
    """
    source = display_name if display_name and display_name.strip() else relative_uri
    return to_type_name(source) or DEFAULT_INTERFACE_NAME


def to_method_name(verb: str, resource_uri: str) -> str:
    """Name the method generated for an action.

    URI placeholders read as ``By <name>``, so ``get /users/{id}`` becomes
    ``getUsersById``.
    """
    return verb.lower() + to_type_name(resource_uri.replace("{", " By "))


def to_enum_constant_name(literal: str) -> str:
    """Convert an enumeration literal to a Java enum constant name.

    Case is preserved; separators collapse to a single underscore.

    Example::

        >>> to_enum_constant_name("application/json")
        'application_json'
        >>> to_enum_constant_name("404")
        '_404'
    """
    name = _SEPARATOR_RE.sub("_", literal).strip("_")
    if not name:
        return "VALUE"
    if name[0].isdigit():
        name = DIGIT_MARKER + name
    return KEYWORD_MARKER + name if name in JAVA_KEYWORDS else name
