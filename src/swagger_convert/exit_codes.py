"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~swagger_convert.exceptions.SwaggerConvertError`
subclass. Shell scripts can inspect the exit code to tell a broken input
document apart from a file-system problem without parsing stderr.

Example::

    $ swagger-convert petstore.json -o openapi.json
    $ echo $?
    4   # EXIT_FILE_ACCESS_ERROR -- openapi.json already exists
"""

EXIT_SUCCESS = 0
"""The conversion completed and the output file was written."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SPEC_PARSE_ERROR = 3
"""The Swagger document could not be parsed or is structurally invalid."""

EXIT_FILE_ACCESS_ERROR = 4
"""The input could not be read or the output could not be written."""
