"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~ramlgen.exceptions.RamlgenError` subclass.
Build scripts can inspect the exit code to tell a bad description apart from
a bad configuration without parsing stderr.

Example::

    $ ramlgen generate broken.raml
    $ echo $?
    7   # EXIT_RAML_PARSE_ERROR -- the description failed validation
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred, or the configuration is invalid."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_RAML_PARSE_ERROR = 7
"""The RAML description could not be loaded, parsed, or validated."""

EXIT_CODE_MODEL_ERROR = 8
"""The class model could not be built (e.g. two methods share a name)."""
