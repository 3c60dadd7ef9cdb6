"""Swagger document loading -- read, check the version tag, and validate.

This sub-package is the first half of the swagger_convert pipeline: turning
a raw Swagger 2.0 document (JSON or YAML, local file, remote URL or stdin)
into a :class:`~swagger_convert.models.Swagger` model that the conversion
engine can consume.

Typical usage::

    from swagger_convert.parser import load_spec, parse_swagger, validate_swagger_version

    raw = load_spec("https://petstore.swagger.io/v2/swagger.json")
    validate_swagger_version(raw)
    swagger = parse_swagger(raw)
"""

from swagger_convert.parser.loader import load_spec, parse_swagger, validate_swagger_version

__all__ = ["load_spec", "parse_swagger", "validate_swagger_version"]
