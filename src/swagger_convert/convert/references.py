"""Rewrite internal ``$ref`` pointers from Swagger 2.0 to OpenAPI 3 locations.

Swagger keeps reusable objects at the document root (``#/definitions/...``,
``#/responses/...``) while OpenAPI 3 moves them under ``#/components/``.
Pointers are plain strings: they are rewritten once and never followed,
so circular schemas need no special handling.

Shared parameters are the exception. OpenAPI 3 has a
``components/parameters`` section too, but a body parameter there would
have to become a request body, so shared parameters are inlined instead by
:func:`resolve_parameter_ref`.
"""

from __future__ import annotations

from typing import Mapping, Optional

from swagger_convert.models import Parameter

INTERNAL_PREFIX = "#/"
COMPONENTS_PREFIX = "#/components/"

_SECTION_RENAMES = {"definitions": "schemas"}


def rewrite_ref(pointer: str) -> str:
    """Map a Swagger 2.0 internal pointer to its OpenAPI 3 location.

    Only the first path segment is renamed (``definitions`` becomes
    ``schemas``); every other segment, escaped ones included, is kept as is.

    Example::

        >>> rewrite_ref("#/definitions/Pet")
        '#/components/schemas/Pet'
        >>> rewrite_ref("#/responses/NotFound")
        '#/components/responses/NotFound'

    Args:
        pointer: An internal JSON pointer starting with ``#/``.

    Returns:
        The rewritten pointer.

    Raises:
        ValueError: If *pointer* is not an internal pointer.
    """
    if not pointer.startswith(INTERNAL_PREFIX):
        raise ValueError(f"not an internal reference: {pointer!r}")

    section, sep, rest = pointer[len(INTERNAL_PREFIX):].partition("/")
    section = _SECTION_RENAMES.get(section, section)
    return f"{COMPONENTS_PREFIX}{section}{sep}{rest}"


def ref_object(pointer: str) -> dict[str, str]:
    """Return the OpenAPI reference object for a Swagger pointer."""
    return {"$ref": rewrite_ref(pointer)}


def unescape_segment(segment: str) -> str:
    """Decode an RFC 6901 pointer segment (``~1`` is ``/``, ``~0`` is ``~``)."""
    return segment.replace("~1", "/").replace("~0", "~")


def resolve_parameter_ref(
    pointer: str, shared: Optional[Mapping[str, Parameter]]
) -> Optional[Parameter]:
    """Look up ``#/parameters/<name>`` in the document's shared parameters.

    Returns:
        The shared :class:`~swagger_convert.models.Parameter`, or ``None``
        when the pointer does not name one.
    """
    if not shared:
        return None
    prefix = f"{INTERNAL_PREFIX}parameters/"
    if not pointer.startswith(prefix):
        return None
    name = pointer[len(prefix):]
    if "/" in name:
        return None
    return shared.get(unescape_segment(name))
