"""Load RAML descriptions from a URL, local file, or stdin.

This module handles all I/O for fetching raw RAML documents and turning them
into Python dictionaries. The three public functions are:

* :func:`load_raml` -- Read the text of a RAML document from any supported
  source.
* :func:`validate_raml_version` -- Check the ``#%RAML 0.8`` header line.
* :func:`parse_content` -- Parse the YAML body into a dictionary.

``!include`` tags are accepted but not followed: the tagged node is kept as
an :class:`Include` marker. Included content (schemas, examples) plays no
part in interface generation.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from ramlgen.exceptions import InvalidUsageError, RamlParseError

RAML_HEADER_PREFIX = "#%RAML"
SUPPORTED_VERSION = "0.8"


class Include(str):
    """Unresolved target of an ``!include`` tag."""

    def __repr__(self) -> str:
        return f"Include({str.__repr__(self)})"


class _RamlLoader(yaml.SafeLoader):
    """Safe YAML loader that understands the RAML ``!include`` tag."""


def _construct_include(loader: yaml.SafeLoader, node: yaml.Node) -> Include:
    return Include(loader.construct_scalar(node))


_RamlLoader.add_constructor("!include", _construct_include)


def load_raml(source: str, encoding: str = "utf-8") -> str:
    """Load the text of a RAML document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        encoding: Encoding of a local file.

    Returns:
        The document text.

    Raises:
        InvalidUsageError: If *source* is "-" but stdin is a terminal.
        RamlParseError: If the source cannot be read or is empty.
    """
    if source == "-":
        content = _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        content = _load_from_url(source)
    else:
        content = _load_from_file(source, encoding)

    if not content.strip():
        raise RamlParseError(f"RAML source is empty: {source}")
    return content


def _load_from_stdin() -> str:
    if sys.stdin.isatty():
        raise InvalidUsageError(
            "No RAML document on stdin. Pipe one in, or pass a file path or URL."
        )
    try:
        return sys.stdin.read()
    except Exception as exc:
        raise RamlParseError(f"Failed to read from stdin: {exc}") from exc


def _load_from_url(url: str) -> str:
    """Fetch the document at *url*.

    Raises:
        RamlParseError: If the URL cannot be fetched.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RamlParseError(
            f"HTTP {exc.response.status_code} fetching RAML from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise RamlParseError(f"Failed to fetch RAML from {url}: {exc}") from exc
    return response.text


def _load_from_file(path: str, encoding: str) -> str:
    file_path = Path(path)
    if not file_path.is_file():
        raise RamlParseError(f"RAML file not found: {path}")
    try:
        return file_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise RamlParseError(f"Failed to read RAML file {path}: {exc}") from exc


def validate_raml_version(content: str) -> str:
    """Validate the header line and return the declared RAML version.

    Args:
        content: The document text.

    Returns:
        The version string (always ``"0.8"``).

    Raises:
        RamlParseError: If the header is missing or declares another version.
    """
    first_line = content.lstrip("\ufeff").split("\n", 1)[0].strip()
    if not first_line.startswith(RAML_HEADER_PREFIX):
        raise RamlParseError(
            f"Missing '{RAML_HEADER_PREFIX} {SUPPORTED_VERSION}' header. "
            "Is this a RAML document?"
        )

    version = first_line[len(RAML_HEADER_PREFIX):].strip()
    if version != SUPPORTED_VERSION:
        raise RamlParseError(
            f"Unsupported RAML version: {version or '(none)'}. "
            f"Only RAML {SUPPORTED_VERSION} is supported."
        )
    return version


def parse_content(content: str) -> dict[str, Any]:
    """Parse the YAML body of a RAML document.

    The header line is a YAML comment, so the whole text can be handed to
    the YAML parser.

    Raises:
        RamlParseError: If the content is not valid YAML or not a mapping.
    """
    try:
        result = yaml.load(content, Loader=_RamlLoader)  # noqa: S506 - SafeLoader subclass
    except yaml.YAMLError as exc:
        raise RamlParseError(f"Invalid YAML: {exc}") from exc

    if not isinstance(result, dict):
        raise RamlParseError(
            "RAML document must be a YAML mapping (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )
    return result
