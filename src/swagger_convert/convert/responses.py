"""Convert Swagger 2.0 responses into OpenAPI 3 responses.

Swagger 2.0 responses carry a bare ``schema``; OpenAPI 3 nests it in a
``content`` map keyed by media type. Every response is treated as JSON.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from swagger_convert.config import JSON_CONTENT_TYPE
from swagger_convert.convert.references import ref_object
from swagger_convert.convert.schema import (
    compact,
    convert_parameter_shape,
    convert_schema_or_ref,
    describe_unconvertible,
)
from swagger_convert.extensions import openapi_extensions
from swagger_convert.models import Header, Reference, Response, Responses

logger = logging.getLogger(__name__)


def convert_header(name: str, header: Header) -> Optional[dict[str, Any]]:
    """Convert a response header, or return ``None`` if its shape is unusable."""
    schema = convert_parameter_shape(header.shape)
    if schema is None:
        logger.warning(
            "Dropping response header '%s': %s",
            name,
            describe_unconvertible(header.shape),
        )
        return None
    return compact({"description": header.description, "schema": schema})


def convert_response(response: Response) -> dict[str, Any]:
    """Convert one inline response.

    The schema and the examples (each wrapped as ``{"value": ...}``) share a
    single ``application/json`` entry; with neither there is no ``content``.
    """
    media: dict[str, Any] = {}
    if response.schema_ is not None:
        media["schema"] = convert_schema_or_ref(response.schema_)
    if response.examples:
        media["examples"] = {
            name: {"value": value} for name, value in response.examples.items()
        }

    headers: dict[str, Any] = {}
    for name, header in (response.headers or {}).items():
        converted = convert_header(name, header)
        if converted is not None:
            headers[name] = converted

    fields = {
        "description": response.description,
        "headers": headers or None,
        "content": {JSON_CONTENT_TYPE: media} if media else None,
    }
    return {**compact(fields), **openapi_extensions(response.extensions)}


def convert_response_or_ref(value: Union[Reference, Response]) -> dict[str, Any]:
    if isinstance(value, Reference):
        return ref_object(value.ref)
    return convert_response(value)


def convert_responses(responses: Responses) -> dict[str, Any]:
    """Convert an operation's responses collection.

    ``default`` comes first, followed by the status codes in source order.
    Extension keys of the collection itself are not carried over.
    """
    result: dict[str, Any] = {}
    if responses.default is not None:
        result["default"] = convert_response_or_ref(responses.default)
    for status, response in responses.statuses.items():
        result[status] = convert_response_or_ref(response)
    if responses.extensions:
        logger.debug(
            "Dropping extensions of a responses object: %s",
            ", ".join(responses.extensions),
        )
    return result
