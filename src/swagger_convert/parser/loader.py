"""Load Swagger 2.0 documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw documents and converting them
into Python dictionaries. It supports both JSON and YAML formats with
automatic format detection, checks that the document declares Swagger 2.0,
and validates it into the typed :class:`~swagger_convert.models.Swagger`
model.

The public functions are:

* :func:`load_spec` -- Load and parse a document from any supported source.
* :func:`validate_swagger_version` -- Check the ``swagger`` version tag,
  rejecting OpenAPI 3.x and anything that is not ``2.0``.
* :func:`parse_swagger` -- Validate a raw dict into a
  :class:`~swagger_convert.models.Swagger` model with readable errors.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from swagger_convert.config import STDIN_SOURCE
from swagger_convert.exceptions import FileAccessError, SpecParseError
from swagger_convert.models import Swagger

SUPPORTED_SWAGGER_VERSION = "2.0"

# Keeps parse error output readable for documents that are wrong everywhere
_MAX_REPORTED_ERRORS = 20


def load_spec(source: str) -> dict[str, Any]:
    """Load a Swagger document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        FileAccessError: If the source cannot be read or fetched.
        SpecParseError: If the content cannot be parsed.
    """
    if source == STDIN_SOURCE:
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read the document from stdin, then parse it as JSON or YAML.

    Raises:
        FileAccessError: If stdin cannot be read.
        SpecParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise FileAccessError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch the document from a URL. Supports JSON and YAML responses.

    Raises:
        FileAccessError: If the URL cannot be fetched.
        SpecParseError: If content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FileAccessError(
            f"HTTP {exc.response.status_code} fetching Swagger document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise FileAccessError(
            f"Failed to fetch Swagger document from {url}: {exc}"
        ) from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load the document from a local file.

    ``.json``, ``.yaml`` and ``.yml`` extensions pick the parser; any other
    extension falls back to content-based detection.

    Raises:
        FileAccessError: If the file does not exist or cannot be read.
        SpecParseError: If the file is empty or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileAccessError(f"Swagger file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Failed to read Swagger file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Swagger file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML. A
    'json' hint disables the YAML fallback.

    Raises:
        SpecParseError: If the content cannot be parsed as either format, or
            does not hold a mapping at the top level.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_mapping(result)

    msg = "Failed to parse Swagger document as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        raise SpecParseError(
            "Swagger document must be a JSON/YAML object (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )
    return result


def validate_swagger_version(spec: dict[str, Any]) -> str:
    """Validate and return the Swagger version string.

    Only ``2.0`` is supported. OpenAPI 3.x documents get a dedicated message
    since they need no conversion.

    Args:
        spec: The parsed document dictionary.

    Returns:
        The version string, ``"2.0"``.

    Raises:
        SpecParseError: If the version is missing or unsupported.
    """
    if "openapi" in spec:
        raise SpecParseError(
            f"Document is already OpenAPI {spec['openapi']}; "
            "only Swagger 2.0 documents can be converted"
        )

    swagger_version = spec.get("swagger")
    if swagger_version is None:
        raise SpecParseError(
            "Missing 'swagger' field. Is this a Swagger 2.0 document?"
        )

    version_str = str(swagger_version)
    if version_str != SUPPORTED_SWAGGER_VERSION:
        raise SpecParseError(
            f"Unsupported Swagger version: {version_str}. "
            f"Only Swagger {SUPPORTED_SWAGGER_VERSION} is supported."
        )
    return version_str


def parse_swagger(spec: dict[str, Any]) -> Swagger:
    """Validate a raw document into the :class:`~swagger_convert.models.Swagger` model.

    Raises:
        SpecParseError: If the document is structurally invalid. The message
            lists every failing field location.
    """
    try:
        return Swagger.model_validate(spec)
    except ValidationError as exc:
        raise SpecParseError(_format_validation_error(exc)) from exc


def _format_validation_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    lines = [f"Invalid Swagger {SUPPORTED_SWAGGER_VERSION} document ({len(errors)} error(s)):"]
    for error in errors[:_MAX_REPORTED_ERRORS]:
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        lines.append(f"  {location}: {error['msg']}")
    if len(errors) > _MAX_REPORTED_ERRORS:
        lines.append(f"  ... and {len(errors) - _MAX_REPORTED_ERRORS} more")
    return "\n".join(lines)
