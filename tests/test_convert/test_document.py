"""Tests for swagger_convert.convert.document and convert.paths.

Golden tests convert each ``tests/fixtures/<case>.swagger.json`` and compare
the result with ``tests/fixtures/<case>.openapi.json``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
from openapi_pydantic.v3.v3_1 import OpenAPI

from swagger_convert.convert import build_document, convert, convert_document, to_dict
from swagger_convert.convert.document import build_components
from swagger_convert.convert.paths import convert_operation, convert_path_item
from swagger_convert.exceptions import SpecParseError
from swagger_convert.models import Operation, PathItem, Swagger
from swagger_convert.parser import parse_swagger

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

GOLDEN_CASES = ["minimal", "schemas", "parameters", "security", "servers"]


def load_fixture(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Golden documents
# ---------------------------------------------------------------------------


class TestGoldenDocuments:
    """Compare whole conversions against expected OpenAPI documents."""

    @pytest.mark.parametrize("case", GOLDEN_CASES)
    def test_golden(self, case: str) -> None:
        source = load_fixture(f"{case}.swagger.json")
        expected = load_fixture(f"{case}.openapi.json")
        assert convert_document(source) == expected

    @pytest.mark.parametrize("case", GOLDEN_CASES)
    def test_build_document_is_valid_openapi(self, case: str) -> None:
        swagger = parse_swagger(load_fixture(f"{case}.swagger.json"))
        assert isinstance(convert(swagger), OpenAPI)


# ---------------------------------------------------------------------------
# Document assembly
# ---------------------------------------------------------------------------


class TestBuildDocument:
    """Test the document-level fields."""

    def test_version_and_servers_always_present(self, minimal_swagger) -> None:
        document = build_document(Swagger.model_validate(minimal_swagger))
        assert document["openapi"] == "3.1.0"
        assert document["servers"] == []
        assert "components" not in document

    def test_security_requirements_are_copied(self, make_swagger) -> None:
        document = build_document(
            Swagger.model_validate(make_swagger(security=[{"oauth": ["read", "write"]}]))
        )
        assert document["security"] == [{"oauth": ["read", "write"]}]

    def test_global_consumes_is_not_carried(self, make_swagger) -> None:
        document = build_document(
            Swagger.model_validate(make_swagger(consumes=["application/xml"]))
        )
        assert "consumes" not in document

    def test_shared_parameters_are_inlined_not_componentized(self, make_swagger) -> None:
        swagger = Swagger.model_validate(
            make_swagger(
                parameters={"limit": {"name": "limit", "in": "query", "type": "integer"}},
                paths={
                    "/items": {
                        "get": {
                            "parameters": [{"$ref": "#/parameters/limit"}],
                            "responses": {"200": {"description": "OK"}},
                        }
                    }
                },
            )
        )
        document = build_document(swagger)
        assert "components" not in document
        assert document["paths"]["/items"]["get"]["parameters"][0]["name"] == "limit"


class TestBuildComponents:
    """Test the components section."""

    def test_empty(self, minimal_swagger) -> None:
        assert build_components(Swagger.model_validate(minimal_swagger)) == {}

    def test_shared_responses(self, make_swagger) -> None:
        swagger = Swagger.model_validate(
            make_swagger(
                responses={"NotFound": {"description": "Not found", "schema": {"$ref": "#/definitions/Error"}}},
                definitions={"Error": {"type": "object"}},
            )
        )
        assert build_components(swagger) == {
            "schemas": {"Error": {"type": "object"}},
            "responses": {
                "NotFound": {
                    "description": "Not found",
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}},
                }
            },
        }

    def test_schema_reference_definition(self, make_swagger) -> None:
        swagger = Swagger.model_validate(
            make_swagger(definitions={"Alias": {"$ref": "#/definitions/Pet"}, "Pet": {"type": "object"}})
        )
        assert build_components(swagger)["schemas"]["Alias"] == {"$ref": "#/components/schemas/Pet"}


# ---------------------------------------------------------------------------
# Paths and operations
# ---------------------------------------------------------------------------


class TestConvertOperation:
    """Test operation conversion."""

    def test_fields_are_copied(self) -> None:
        operation = Operation.model_validate(
            {
                "tags": ["pets"],
                "summary": "List pets",
                "description": "All of them",
                "operationId": "listPets",
                "deprecated": True,
                "security": [{"oauth": ["read"]}],
                "produces": ["application/xml"],
                "x-rate-limited": True,
                "responses": {"200": {"description": "OK"}},
            }
        )
        assert convert_operation(operation) == {
            "tags": ["pets"],
            "summary": "List pets",
            "description": "All of them",
            "operationId": "listPets",
            "deprecated": True,
            "security": [{"oauth": ["read"]}],
            "responses": {"200": {"description": "OK"}},
            "x-rate-limited": True,
        }

    def test_parameters_omitted_when_not_declared(self) -> None:
        operation = Operation.model_validate({"responses": {"200": {"description": "OK"}}})
        assert "parameters" not in convert_operation(operation)

    def test_parameters_kept_when_all_became_a_body(self) -> None:
        operation = Operation.model_validate(
            {
                "parameters": [{"name": "pet", "in": "body", "schema": {"type": "object"}}],
                "responses": {"201": {"description": "Created"}},
            }
        )
        result = convert_operation(operation)
        assert result["parameters"] == []
        assert result["requestBody"]["content"]["application/json"] == {"schema": {"type": "object"}}


class TestConvertPathItem:
    """Test path item conversion."""

    def test_all_verbs(self) -> None:
        ok = {"responses": {"200": {"description": "OK"}}}
        verbs = ["get", "put", "post", "delete", "options", "head", "patch", "trace"]
        item = PathItem.model_validate({verb: ok for verb in verbs})
        assert list(convert_path_item(item)) == verbs

    def test_extensions(self) -> None:
        item = PathItem.model_validate({"x-controller": "pets"})
        assert convert_path_item(item) == {"x-controller": "pets"}


class TestConvertDocument:
    """Test the raw-dict entry point."""

    def test_invalid_document_raises(self, make_swagger) -> None:
        with pytest.raises(SpecParseError):
            convert_document(make_swagger(info={"version": "1"}))

    def test_unresolvable_schema_raises(self, make_swagger) -> None:
        with pytest.raises(SpecParseError, match="definitions.Broken"):
            convert_document(make_swagger(definitions={"Broken": {"description": "no type"}}))

    def test_to_dict_round_trip(self, parameters_swagger) -> None:
        openapi = convert(parse_swagger(parameters_swagger))
        assert to_dict(OpenAPI.model_validate(to_dict(openapi))) == to_dict(openapi)

    def test_nullable_definitions_are_valid_openapi(self, make_swagger) -> None:
        document = convert_document(
            make_swagger(definitions={"Name": {"type": "string", "x-nullable": True}})
        )
        assert document["components"]["schemas"]["Name"] == {"type": ["string", "null"]}

    def test_malformed_parameters_are_dropped(self, make_operation_swagger, caplog) -> None:
        source = make_operation_swagger(
            parameters=[
                {"name": "bad", "in": "query", "type": "integer", "maximum": "ten"},
                {"name": "tags", "in": "query", "type": "array", "items": "string"},
                {"name": "ok", "in": "query", "type": "string"},
            ],
            responses={
                "200": {
                    "description": "OK",
                    "headers": {"X-Rate": {"type": "integer", "maxLength": "x"}},
                }
            },
        )
        with caplog.at_level(logging.WARNING, logger="swagger_convert"):
            document = convert_document(source)
        operation = document["paths"]["/items"]["get"]
        assert operation["parameters"] == [
            {"name": "ok", "in": "query", "required": False, "schema": {"type": "string"}}
        ]
        assert operation["responses"]["200"] == {"description": "OK"}
        assert "Dropping query parameter 'bad'" in caplog.text
        assert "Dropping query parameter 'tags'" in caplog.text
        assert "Dropping response header 'X-Rate'" in caplog.text

    def test_integer_bounds_are_written_as_integers(self, make_swagger) -> None:
        document = convert_document(
            make_swagger(
                definitions={
                    "Count": {"type": "integer", "maximum": 10, "exclusiveMaximum": True, "multipleOf": 2}
                }
            )
        )
        assert json.dumps(document["components"]["schemas"]["Count"]) == (
            '{"type": "integer", "multipleOf": 2, "exclusiveMaximum": 10}'
        )

    def test_explicit_null_default_survives(self, make_swagger) -> None:
        document = convert_document(
            make_swagger(definitions={"Note": {"type": "string", "default": None}})
        )
        assert document["components"]["schemas"]["Note"] == {"type": "string", "default": None}

    def test_model_dump_drops_explicit_nulls(self, make_swagger) -> None:
        source = make_swagger(definitions={"Note": {"type": "string", "default": None}})
        openapi = convert(parse_swagger(source))
        assert to_dict(openapi)["components"]["schemas"]["Note"] == {"type": "string"}
