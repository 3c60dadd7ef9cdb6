"""Vendor extension (``x-``) handling.

Swagger 2.0 lets almost every object carry extra keys prefixed with ``x-``.
The source models keep only those keys (see
:class:`~swagger_convert.models.ExtensibleModel`), and the converters pass
them on to the OpenAPI output. One key is special: ``x-nullable`` was the
de-facto Swagger 2.0 way to mark a value as nullable. It is read as a flag by
the schema converter and never copied into the output.
"""

from __future__ import annotations

from typing import Any, Mapping

EXTENSION_PREFIX = "x-"
NULLABLE_EXTENSION = "x-nullable"


def is_extension_key(key: Any) -> bool:
    """Return True if *key* names a vendor extension."""
    return isinstance(key, str) and key.startswith(EXTENSION_PREFIX)


def extract_extensions(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return only the vendor extension entries of *data*.

    Args:
        data: A raw document fragment.

    Returns:
        A new dict holding every ``x-`` key of *data* with its value.
    """
    return {key: value for key, value in data.items() if is_extension_key(key)}


def is_nullable(extensions: Mapping[str, Any]) -> bool:
    """Return True when ``x-nullable`` is present and is the boolean ``true``.

    Any other value (a string ``"true"``, ``1``, ...) counts as not nullable.
    """
    return extensions.get(NULLABLE_EXTENSION) is True


def openapi_extensions(extensions: Mapping[str, Any]) -> dict[str, Any]:
    """Return the extensions to emit in the OpenAPI output.

    Everything is copied except ``x-nullable``, which the schema converter
    expresses as a ``null`` member of the type set instead.
    """
    return {
        key: value for key, value in extensions.items() if key != NULLABLE_EXTENSION
    }
