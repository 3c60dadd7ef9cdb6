"""Convert Swagger 2.0 OAuth2 security definitions into OpenAPI 3 security schemes.

Flow names changed between the versions:

======================  =====================
Swagger 2.0 ``flow``    OpenAPI 3 ``flows`` key
======================  =====================
``implicit``            ``implicit``
``password``            ``password``
``application``         ``clientCredentials``
``accessCode``          ``authorizationCode``
======================  =====================
"""

from __future__ import annotations

from typing import Any

from swagger_convert.convert.schema import compact
from swagger_convert.extensions import openapi_extensions
from swagger_convert.models import (
    AccessCodeFlow,
    ApplicationFlow,
    ImplicitFlow,
    OAuth2Scheme,
    PasswordFlow,
)


def convert_flows(scheme: OAuth2Scheme) -> dict[str, Any]:
    """Return the OpenAPI ``flows`` object for *scheme*'s single grant."""
    grant = scheme.grant
    scopes = dict(scheme.scopes or {})

    if isinstance(grant, ImplicitFlow):
        return {
            "implicit": {"authorizationUrl": grant.authorization_url, "scopes": scopes}
        }
    if isinstance(grant, PasswordFlow):
        return {"password": {"tokenUrl": grant.token_url, "scopes": scopes}}
    if isinstance(grant, ApplicationFlow):
        return {"clientCredentials": {"tokenUrl": grant.token_url, "scopes": scopes}}
    if isinstance(grant, AccessCodeFlow):
        return {
            "authorizationCode": {
                "authorizationUrl": grant.authorization_url,
                "tokenUrl": grant.token_url,
                "scopes": scopes,
            }
        }
    raise TypeError(f"unknown OAuth2 flow: {type(grant).__name__}")


def convert_security_scheme(scheme: OAuth2Scheme) -> dict[str, Any]:
    """Convert one OAuth2 security definition into an ``oauth2`` security scheme."""
    fields = {
        "type": "oauth2",
        "description": scheme.description,
        "flows": convert_flows(scheme),
    }
    return {**compact(fields), **openapi_extensions(scheme.extensions)}
