"""Exception hierarchy for ramlgen.

All exceptions inherit from :class:`RamlgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ramlgen.exit_codes`.
The top-level error handler in :func:`ramlgen.app.main` catches
``RamlgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    RamlgenError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- ConfigError            (exit 1)
    +-- RamlParseError         (exit 7)
    +-- CodeModelError         (exit 8)
        +-- NameCollisionError (exit 8)
"""

from ramlgen.exit_codes import (
    EXIT_CODE_MODEL_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_RAML_PARSE_ERROR,
)


class RamlgenError(Exception):
    """Base exception for all ramlgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`ramlgen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RamlgenError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(RamlgenError):
    """Raised for configuration problems (missing output directory, empty base package, invalid JSON)."""

    exit_code = EXIT_GENERIC_FAILURE


class RamlParseError(RamlgenError):
    """Raised when the RAML description cannot be loaded, parsed, or fails validation."""

    exit_code = EXIT_RAML_PARSE_ERROR


class CodeModelError(RamlgenError):
    """Raised when an interface, method, parameter, or type cannot be registered in the class model."""

    exit_code = EXIT_CODE_MODEL_ERROR


class NameCollisionError(CodeModelError):
    """Raised when two generated members would share one identifier in the same scope."""
