"""Split Swagger 2.0 parameter lists into OpenAPI parameters and a request body.

Swagger 2.0 describes request payloads as parameters (``in: body`` or
``in: formData``). OpenAPI 3 moved them into a separate ``requestBody``
object, so every parameter list is classified:

* ``query``, ``header`` and ``path`` parameters stay parameters,
* ``body`` becomes a request body with ``application/json`` content,
* ``formData`` becomes a request body with
  ``application/x-www-form-urlencoded`` content.

Parameters that cannot be expressed in the target format are dropped with
a warning; the rest of the operation is converted normally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from swagger_convert.config import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE
from swagger_convert.convert.references import resolve_parameter_ref
from swagger_convert.convert.schema import (
    compact,
    convert_parameter_shape,
    convert_schema_or_ref,
    describe_unconvertible,
)
from swagger_convert.extensions import openapi_extensions
from swagger_convert.models import (
    BodyLocation,
    Parameter,
    ParameterLocation,
    Reference,
)

logger = logging.getLogger(__name__)

# collectionFormat -> (style, explode)
_COLLECTION_STYLES: dict[str, tuple[str, bool]] = {
    "csv": ("form", False),
    "ssv": ("spaceDelimited", False),
    "pipes": ("pipeDelimited", False),
    "multi": ("form", True),
}

_REQUEST_BODY_LOCATIONS = (ParameterLocation.BODY, ParameterLocation.FORM_DATA)


@dataclass
class ClassifiedParameters:
    """Result of :func:`classify_parameters`.

    Attributes:
        parameters: OpenAPI parameter dicts, in source order.
        request_body: The OpenAPI request body dict, if the list had a
            convertible body or formData parameter.
    """

    parameters: list[dict[str, Any]] = field(default_factory=list)
    request_body: Optional[dict[str, Any]] = None


def resolve_parameter(
    item: Union[Reference, Parameter],
    shared: Optional[Mapping[str, Parameter]] = None,
) -> Optional[Parameter]:
    """Return the inline parameter, or the shared parameter a ``$ref`` points to."""
    if not isinstance(item, Reference):
        return item
    parameter = resolve_parameter_ref(item.ref, shared)
    if parameter is None:
        logger.warning(
            "Dropping parameter reference '%s': no such shared parameter", item.ref
        )
    return parameter


def convert_parameter(parameter: Parameter) -> Optional[dict[str, Any]]:
    """Convert a query, header or path parameter.

    Returns:
        The OpenAPI parameter dict, or ``None`` if its shape is malformed or has
        no schema equivalent.
    """
    location = parameter.location
    if isinstance(location, BodyLocation):
        raise ValueError(f"body parameter '{parameter.name}' is not a plain parameter")

    shape = location.shape
    schema = convert_parameter_shape(shape)
    if schema is None:
        logger.warning(
            "Dropping %s parameter '%s': %s",
            location.kind,
            parameter.name,
            describe_unconvertible(shape),
        )
        return None

    fields: dict[str, Any] = {
        "name": parameter.name,
        "in": location.kind,
        "description": parameter.description,
        "required": parameter.required,
        "schema": schema,
        "allowEmptyValue": shape.allow_empty_value,
    }
    if location.kind == ParameterLocation.QUERY and shape.collection_format:
        style = _COLLECTION_STYLES.get(shape.collection_format)
        if style is not None:
            fields["style"], fields["explode"] = style
    return {**compact(fields), **openapi_extensions(parameter.extensions)}


def convert_request_body(parameter: Parameter) -> Optional[dict[str, Any]]:
    """Convert a body or formData parameter into an OpenAPI request body.

    Returns:
        The request body dict, or ``None`` for a formData parameter whose
        shape is malformed or has no schema equivalent (e.g. ``type: file``).
    """
    location = parameter.location
    if isinstance(location, BodyLocation):
        schema = convert_schema_or_ref(location.schema_)
        content_type = JSON_CONTENT_TYPE
    else:
        schema = convert_parameter_shape(location.shape)
        if schema is None:
            logger.warning(
                "Dropping formData parameter '%s': %s",
                parameter.name,
                describe_unconvertible(location.shape),
            )
            return None
        content_type = FORM_CONTENT_TYPE

    return compact(
        {
            "description": parameter.description,
            "content": {content_type: {"schema": schema}},
            "required": parameter.required,
        }
    )


def classify_parameters(
    items: Optional[Sequence[Union[Reference, Parameter]]],
    shared: Optional[Mapping[str, Parameter]] = None,
) -> ClassifiedParameters:
    """Classify a parameter list into OpenAPI parameters and a request body.

    ``$ref`` items are looked up in *shared* first. When the list holds
    several body or formData parameters, the last convertible one becomes
    the request body.

    Args:
        items: The parameter list of an operation or path item.
        shared: The document's top-level ``parameters`` map.

    Returns:
        A :class:`ClassifiedParameters`.
    """
    result = ClassifiedParameters()
    for item in items or ():
        parameter = resolve_parameter(item, shared)
        if parameter is None:
            continue

        if parameter.kind in _REQUEST_BODY_LOCATIONS:
            body = convert_request_body(parameter)
            if body is None:
                continue
            if result.request_body is not None:
                logger.debug(
                    "Request body replaced by later %s parameter '%s'",
                    parameter.kind.value,
                    parameter.name,
                )
            result.request_body = body
            continue

        converted = convert_parameter(parameter)
        if converted is not None:
            result.parameters.append(converted)
    return result


def convert_path_parameters(
    items: Optional[Sequence[Union[Reference, Parameter]]],
    shared: Optional[Mapping[str, Parameter]] = None,
) -> list[dict[str, Any]]:
    """Convert the parameters shared by every operation of a path item.

    A path item has no request body in OpenAPI 3, so body and formData
    parameters declared at this level are dropped with a warning.
    """
    classified = classify_parameters(items, shared)
    if classified.request_body is not None:
        logger.warning(
            "Dropping body/formData parameters declared on a path item; "
            "declare them on the operations instead"
        )
    return classified.parameters
