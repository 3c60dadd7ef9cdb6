"""Assemble the OpenAPI document from a parsed Swagger 2.0 model.

The pipeline has three steps, each exposed on its own:

1. :func:`build_document` walks the :class:`~swagger_convert.models.Swagger`
   tree and produces a plain dict shaped like an OpenAPI 3.1 document.
2. :func:`validate_document` checks that dict against the
   :class:`openapi_pydantic.v3.v3_1.OpenAPI` model; :func:`convert` runs
   both steps and returns the model.
3. :func:`to_dict` serializes the model back into JSON-ready data
   containing exactly the non-null fields the conversion produced.

:func:`convert_document` parses a raw Swagger dict, builds and validates the
document, and returns the built dict itself. Integer bounds stay integers
and explicit ``null`` defaults and examples are kept, which a round trip
through the model would turn into floats and drop.
"""

from __future__ import annotations

import logging
from typing import Any

from openapi_pydantic.v3.v3_1 import OpenAPI
from pydantic import ValidationError

from swagger_convert.config import OPENAPI_VERSION
from swagger_convert.convert.paths import convert_paths
from swagger_convert.convert.responses import convert_response_or_ref
from swagger_convert.convert.schema import compact, convert_schema_or_ref
from swagger_convert.convert.security import convert_security_scheme
from swagger_convert.convert.servers import synthesize_servers
from swagger_convert.exceptions import SwaggerConvertError
from swagger_convert.extensions import openapi_extensions
from swagger_convert.models import Swagger
from swagger_convert.parser.loader import parse_swagger

logger = logging.getLogger(__name__)


def build_components(swagger: Swagger) -> dict[str, Any]:
    """Collect reusable definitions under their OpenAPI component names.

    Empty sections are left out; the result is ``{}`` when nothing is
    reusable.
    """
    schemas = {
        name: convert_schema_or_ref(schema)
        for name, schema in (swagger.definitions or {}).items()
    }
    responses = {
        name: convert_response_or_ref(response)
        for name, response in (swagger.responses or {}).items()
    }
    security_schemes = {
        name: convert_security_scheme(scheme)
        for name, scheme in swagger.security_definitions.items()
    }
    return compact(
        {
            "schemas": schemas or None,
            "responses": responses or None,
            "securitySchemes": security_schemes or None,
        }
    )


def build_document(swagger: Swagger) -> dict[str, Any]:
    """Produce the OpenAPI document for *swagger* as a plain dict.

    ``info``, ``tags``, ``externalDocs``, the top-level ``security``
    requirements and root extensions are copied through. ``servers`` is
    always present, possibly empty.
    """
    if swagger.parameters:
        logger.debug(
            "Inlining %d shared parameter(s) at their use sites", len(swagger.parameters)
        )

    fields = {
        "openapi": OPENAPI_VERSION,
        "info": swagger.info.model_dump(),
        "servers": synthesize_servers(swagger.schemes, swagger.host, swagger.base_path),
        "paths": convert_paths(swagger.paths, swagger.parameters),
        "components": build_components(swagger) or None,
        "security": swagger.security,
        "tags": [tag.model_dump() for tag in swagger.tags] if swagger.tags is not None else None,
        "externalDocs": (
            swagger.external_docs.model_dump() if swagger.external_docs else None
        ),
    }
    return {**compact(fields), **openapi_extensions(swagger.extensions)}


def validate_document(document: dict[str, Any]) -> OpenAPI:
    """Validate an assembled document against the OpenAPI 3.1 model.

    Raises:
        SwaggerConvertError: If the document is rejected by the OpenAPI
            model. This indicates a converter bug, not bad input.
    """
    try:
        return OpenAPI.model_validate(document)
    except ValidationError as exc:
        raise SwaggerConvertError(
            f"Converted document is not valid OpenAPI {OPENAPI_VERSION}: {exc}"
        ) from exc


def convert(swagger: Swagger) -> OpenAPI:
    """Convert a parsed Swagger document into an OpenAPI model.

    Raises:
        SwaggerConvertError: See :func:`validate_document`.
    """
    return validate_document(build_document(swagger))


def to_dict(openapi: OpenAPI) -> dict[str, Any]:
    """Serialize *openapi* to JSON-ready data, leaving out unset and null fields."""
    return openapi.model_dump(
        mode="json", by_alias=True, exclude_none=True, exclude_unset=True
    )


def convert_document(raw: dict[str, Any]) -> dict[str, Any]:
    """Parse, convert and validate a raw Swagger 2.0 document.

    Args:
        raw: The Swagger document as returned by
            :func:`~swagger_convert.parser.loader.load_spec`.

    Returns:
        The OpenAPI document as JSON-ready data, exactly as assembled by
        :func:`build_document`.

    Raises:
        SpecParseError: If *raw* is not a valid Swagger 2.0 document.
        SwaggerConvertError: If the assembled document fails validation.
    """
    document = build_document(parse_swagger(raw))
    validate_document(document)
    return document
