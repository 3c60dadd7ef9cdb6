"""Exception hierarchy for swagger_convert.

All exceptions inherit from :class:`SwaggerConvertError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`swagger_convert.exit_codes`. The CLI command catches
``SwaggerConvertError`` and exits with the appropriate code.

Subclass hierarchy::

    SwaggerConvertError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- SpecParseError          (exit 3)
    |   +-- SchemaResolutionError
    +-- FileAccessError         (exit 4)

Only structural problems are raised. Elements that merely cannot be
converted (an oddly typed parameter, a malformed ``additionalProperties``)
are dropped by the converters and reported through :mod:`logging`.
"""

from swagger_convert.exit_codes import (
    EXIT_FILE_ACCESS_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SwaggerConvertError(Exception):
    """Base exception for all swagger_convert errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`swagger_convert.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SwaggerConvertError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SwaggerConvertError):
    """Raised when the Swagger document cannot be parsed or fails validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class SchemaResolutionError(SpecParseError, ValueError):
    """Raised when a schema node matches none of the array, object or allOf shapes.

    Also a :class:`ValueError` so that Pydantic reports it as an ordinary
    validation error when the node is nested inside a larger model.
    """


class FileAccessError(SwaggerConvertError):
    """Raised when the input cannot be read or the output cannot be written."""

    exit_code = EXIT_FILE_ACCESS_ERROR
