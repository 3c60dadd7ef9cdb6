"""Convert Swagger 2.0 schemas and parameter shapes into OpenAPI 3.1 schema dicts.

The functions here produce plain JSON-shaped dicts keyed by OpenAPI field
names. Validation against the OpenAPI model happens once, for the whole
document, in :mod:`swagger_convert.convert.document`.

Two Swagger 2.0 idioms are translated on the way:

* ``x-nullable: true`` widens ``type`` into a type set containing
  ``"null"``, e.g. ``"string"`` becomes ``["string", "null"]``.
* Boolean ``exclusiveMaximum``/``exclusiveMinimum`` flags become the numeric
  bounds OpenAPI 3.1 expects.
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Mapping, Optional, Union, get_args

from pydantic import BaseModel

from swagger_convert.convert.references import ref_object
from swagger_convert.extensions import is_nullable, openapi_extensions
from swagger_convert.models import (
    AllOfSchema,
    ArraySchema,
    JsonType,
    MalformedShape,
    ObjectSchema,
    ParameterShape,
    Reference,
    UntypedAdditionalProperties,
)

logger = logging.getLogger(__name__)

NULL_TYPE = "null"
JSON_TYPES = frozenset(get_args(JsonType))

_NULLABLE_VALUES = ("default", "example")


def compact(fields: Mapping[str, Any], keep: Collection[str] = ()) -> dict[str, Any]:
    """Return a copy of *fields* without the entries whose value is ``None``.

    Keys listed in *keep* stay even when their value is ``None``.
    """
    return {
        key: value
        for key, value in fields.items()
        if value is not None or key in keep
    }


def explicit_nulls(source: BaseModel) -> frozenset[str]:
    """Return which of ``default``/``example`` were given as an explicit ``null``."""
    return frozenset(
        key
        for key in _NULLABLE_VALUES
        if key in source.model_fields_set and getattr(source, key) is None
    )


def widen_type(declared: Union[str, list[str]], nullable: bool) -> Union[str, list[str]]:
    """Add ``"null"`` to a declared type when *nullable* is set.

    A declared type list is flattened into the result and ``"null"`` is
    never added twice, so widening an already widened type is a no-op.
    """
    if not nullable:
        return declared
    types = list(declared) if isinstance(declared, list) else [declared]
    if NULL_TYPE not in types:
        types.append(NULL_TYPE)
    return types


def _bound(
    key: str, exclusive_key: str, value: Optional[float], exclusive: Union[bool, float, None]
) -> dict[str, Any]:
    if isinstance(exclusive, bool):
        if exclusive and value is not None:
            return {exclusive_key: value}
        return compact({key: value})
    return compact({key: value, exclusive_key: exclusive})


def numeric_bounds(source: Union[ObjectSchema, ParameterShape]) -> dict[str, Any]:
    """Return the maximum/minimum fields of *source* in OpenAPI 3.1 form."""
    return {
        **_bound("maximum", "exclusiveMaximum", source.maximum, source.exclusive_maximum),
        **_bound("minimum", "exclusiveMinimum", source.minimum, source.exclusive_minimum),
    }


def convert_schema_or_ref(
    value: Union[Reference, ArraySchema, ObjectSchema, AllOfSchema],
) -> dict[str, Any]:
    """Convert a Reference-or-Schema value."""
    if isinstance(value, Reference):
        return ref_object(value.ref)
    return convert_schema(value)


def convert_schema(schema: Union[ArraySchema, ObjectSchema, AllOfSchema]) -> dict[str, Any]:
    """Convert one resolved schema variant, recursing into nested schemas.

    Raises:
        TypeError: If *schema* is not one of the three schema models.
    """
    if isinstance(schema, ArraySchema):
        return _convert_array(schema)
    if isinstance(schema, ObjectSchema):
        return _convert_object(schema)
    if isinstance(schema, AllOfSchema):
        return _convert_all_of(schema)
    raise TypeError(f"not a schema: {type(schema).__name__}")


def _convert_array(schema: ArraySchema) -> dict[str, Any]:
    fields = {
        "type": widen_type("array", is_nullable(schema.extensions)),
        "items": convert_schema_or_ref(schema.items),
        "title": schema.title,
        "description": schema.description,
        "default": schema.default,
        "example": schema.example,
        "xml": schema.xml,
        "maxItems": schema.max_items,
        "minItems": schema.min_items,
        "uniqueItems": True if schema.unique_items else None,
    }
    converted = compact(fields, keep=explicit_nulls(schema))
    return {**converted, **openapi_extensions(schema.extensions)}


def _convert_object(schema: ObjectSchema) -> dict[str, Any]:
    properties = {
        name: convert_schema_or_ref(value) for name, value in schema.properties.items()
    }
    fields = {
        "type": widen_type(schema.schema_type, is_nullable(schema.extensions)),
        "format": schema.format,
        "title": schema.title,
        "description": schema.description,
        "default": schema.default,
        "multipleOf": schema.multiple_of,
        **numeric_bounds(schema),
        "maxLength": schema.max_length,
        "minLength": schema.min_length,
        "pattern": schema.pattern,
        "maxProperties": schema.max_properties,
        "minProperties": schema.min_properties,
        "required": schema.required or None,
        "enum": schema.enum_values,
        "properties": properties or None,
        "additionalProperties": convert_additional_properties(
            schema.additional_properties
        ),
        "readOnly": schema.read_only,
        "xml": schema.xml,
        "example": schema.example,
    }
    converted = compact(fields, keep=explicit_nulls(schema))
    return {**converted, **openapi_extensions(schema.extensions)}


def _convert_all_of(schema: AllOfSchema) -> dict[str, Any]:
    if is_nullable(schema.extensions):
        # allOf has no type of its own to widen
        logger.debug("Ignoring x-nullable on an allOf schema")
    fields = {
        "allOf": [convert_schema_or_ref(member) for member in schema.all_of],
        "title": schema.title,
        "description": schema.description,
        "default": schema.default,
        "example": schema.example,
        "discriminator": (
            {"propertyName": schema.discriminator} if schema.discriminator else None
        ),
    }
    converted = compact(fields, keep=explicit_nulls(schema))
    return {**converted, **openapi_extensions(schema.extensions)}


def convert_additional_properties(
    value: Union[Reference, ArraySchema, ObjectSchema, AllOfSchema, bool, UntypedAdditionalProperties, None],
) -> Union[dict[str, Any], bool, None]:
    """Convert ``additionalProperties``.

    Schemas, references and booleans map through. An untyped mapping cannot
    be expressed, so it is replaced by the empty schema ``{}`` (which allows
    any value) and a warning is logged.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, UntypedAdditionalProperties):
        logger.warning(
            "Replacing invalid additionalProperties (keys: %s) with an empty schema",
            ", ".join(sorted(map(str, value.raw))) or "none",
        )
        return {}
    return convert_schema_or_ref(value)


def convert_parameter_shape(
    shape: Union[ParameterShape, MalformedShape],
) -> Optional[dict[str, Any]]:
    """Convert the schema-like shape of a parameter or header.

    Returns:
        The schema dict, or ``None`` when the shape is malformed, has no
        usable ``type`` (missing, ``file``, or anything else outside the JSON
        type names) or is an array whose ``items`` cannot be converted.
    """
    if isinstance(shape, MalformedShape) or shape.schema_type not in JSON_TYPES:
        return None
    nullable = is_nullable(shape.extensions)
    keep = explicit_nulls(shape)

    if shape.schema_type == "array":
        if shape.items is None:
            return None
        items = convert_parameter_shape(shape.items)
        if items is None:
            return None
        return compact(
            {
                "type": widen_type("array", nullable),
                "items": items,
                "default": shape.default,
                "maxItems": shape.max_items,
                "minItems": shape.min_items,
                "uniqueItems": shape.unique_items,
            },
            keep=keep,
        )

    return compact(
        {
            "type": widen_type(shape.schema_type, nullable),
            "format": shape.format,
            "default": shape.default,
            "enum": shape.enum_values,
            "multipleOf": shape.multiple_of,
            **numeric_bounds(shape),
            "maxLength": shape.max_length,
            "minLength": shape.min_length,
            "pattern": shape.pattern,
        },
        keep=keep,
    )


def describe_unconvertible(shape: Union[ParameterShape, MalformedShape]) -> str:
    """Explain why :func:`convert_parameter_shape` returned ``None`` for *shape*."""
    if isinstance(shape, MalformedShape):
        return f"malformed field {shape.problem}"
    return f"type {shape.schema_type!r} cannot be expressed as a schema"
