"""Conversion defaults and the per-run configuration model.

swagger_convert keeps no persisted configuration: no config file, no
environment variables. This module holds the fixed values the converter
relies on and :class:`ConvertConfig`, the validated bundle of CLI inputs
passed to :func:`~swagger_convert.app.run_conversion`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OUTPUT_PATH = Path("openapi.json")
"""Where the OpenAPI document is written when ``--out`` is not given."""

OPENAPI_VERSION = "3.1.0"
"""Version tag of the produced document. Type-set nullability needs 3.1."""

JSON_CONTENT_TYPE = "application/json"
"""Media type of every response and of request bodies built from a body parameter."""

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
"""Media type of request bodies built from formData parameters."""

STDIN_SOURCE = "-"
"""Source value that makes the loader read standard input."""


class ConvertConfig(BaseModel):
    """Inputs of a single conversion run.

    Attributes:
        source: Swagger document location: a file path, an ``http(s)://``
            URL, or ``-`` for stdin.
        out: Path of the OpenAPI file to create. It must not exist yet.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(min_length=1)
    out: Path = DEFAULT_OUTPUT_PATH
