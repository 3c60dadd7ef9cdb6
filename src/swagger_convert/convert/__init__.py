"""Conversion engine -- Swagger 2.0 models in, OpenAPI 3.1 document out.

Typical usage::

    from swagger_convert.convert import convert_document
    from swagger_convert.parser import load_spec

    document = convert_document(load_spec("petstore.yaml"))

:func:`convert` returns the validated :class:`openapi_pydantic.v3.v3_1.OpenAPI`
model instead, for callers that want to keep working with it.

Sub-modules, leaf first:

* :mod:`~swagger_convert.convert.references` -- ``$ref`` rewriting and
  shared-parameter lookup.
* :mod:`~swagger_convert.convert.schema` -- schemas, nullability and
  parameter shapes.
* :mod:`~swagger_convert.convert.parameters` -- parameter lists into
  parameters plus a request body.
* :mod:`~swagger_convert.convert.responses` -- responses and headers.
* :mod:`~swagger_convert.convert.security` -- OAuth2 schemes and flows.
* :mod:`~swagger_convert.convert.servers` -- ``servers`` from
  ``schemes``/``host``/``basePath``.
* :mod:`~swagger_convert.convert.paths` -- path items and operations.
* :mod:`~swagger_convert.convert.document` -- the whole document.
"""

from swagger_convert.convert.document import (
    build_document,
    convert,
    convert_document,
    to_dict,
    validate_document,
)

__all__ = [
    "build_document",
    "convert",
    "convert_document",
    "to_dict",
    "validate_document",
]
