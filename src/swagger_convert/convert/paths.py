"""Convert Swagger 2.0 path items and operations."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from swagger_convert.convert.parameters import classify_parameters, convert_path_parameters
from swagger_convert.convert.responses import convert_responses
from swagger_convert.convert.schema import compact
from swagger_convert.extensions import openapi_extensions
from swagger_convert.models import Operation, Parameter, PathItem

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
"""Verb slots of a path item, in output order."""


def convert_operation(
    operation: Operation, shared: Optional[Mapping[str, Parameter]] = None
) -> dict[str, Any]:
    """Convert one operation.

    ``consumes``, ``produces`` and ``schemes`` have no OpenAPI 3 counterpart
    on an operation and are not carried over. ``parameters`` is only emitted
    when the source operation declares a parameter list.
    """
    classified = classify_parameters(operation.parameters, shared)
    fields = {
        "tags": operation.tags,
        "summary": operation.summary,
        "description": operation.description,
        "externalDocs": (
            operation.external_docs.model_dump() if operation.external_docs else None
        ),
        "operationId": operation.operation_id,
        "parameters": (
            classified.parameters if operation.parameters is not None else None
        ),
        "requestBody": classified.request_body,
        "responses": convert_responses(operation.responses),
        "deprecated": operation.deprecated,
        "security": operation.security,
    }
    return {**compact(fields), **openapi_extensions(operation.extensions)}


def convert_path_item(
    item: PathItem, shared: Optional[Mapping[str, Parameter]] = None
) -> dict[str, Any]:
    """Convert a path item: every present verb slot plus its shared parameters."""
    result: dict[str, Any] = {}
    for method in HTTP_METHODS:
        operation = getattr(item, method)
        if operation is not None:
            result[method] = convert_operation(operation, shared)
    if item.parameters is not None:
        result["parameters"] = convert_path_parameters(item.parameters, shared)
    result.update(openapi_extensions(item.extensions))
    return result


def convert_paths(
    paths: Mapping[str, PathItem], shared: Optional[Mapping[str, Parameter]] = None
) -> dict[str, Any]:
    """Convert the ``paths`` map, keeping the source order."""
    return {path: convert_path_item(item, shared) for path, item in paths.items()}
