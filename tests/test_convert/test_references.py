"""Tests for swagger_convert.convert.references."""

from __future__ import annotations

import pytest

from swagger_convert.convert.references import (
    ref_object,
    resolve_parameter_ref,
    rewrite_ref,
    unescape_segment,
)
from swagger_convert.models import Parameter


class TestRewriteRef:
    """Test pointer rewriting into components."""

    def test_definitions_become_schemas(self) -> None:
        assert rewrite_ref("#/definitions/Pet") == "#/components/schemas/Pet"

    def test_responses_keep_their_section(self) -> None:
        assert rewrite_ref("#/responses/NotFound") == "#/components/responses/NotFound"

    def test_only_first_segment_is_renamed(self) -> None:
        assert (
            rewrite_ref("#/definitions/Pet/properties/definitions")
            == "#/components/schemas/Pet/properties/definitions"
        )

    def test_escaped_segments_stay_escaped(self) -> None:
        assert rewrite_ref("#/definitions/a~1b~0c") == "#/components/schemas/a~1b~0c"

    def test_section_only(self) -> None:
        assert rewrite_ref("#/definitions") == "#/components/schemas"

    def test_external_pointer_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="not an internal reference"):
            rewrite_ref("common.json#/definitions/Pet")

    def test_ref_object(self) -> None:
        assert ref_object("#/definitions/Pet") == {"$ref": "#/components/schemas/Pet"}


class TestResolveParameterRef:
    """Test lookup of shared parameters."""

    @pytest.fixture
    def shared(self) -> dict[str, Parameter]:
        return {
            "limit": Parameter.model_validate({"name": "limit", "in": "query", "type": "integer"}),
            "a/b": Parameter.model_validate({"name": "ab", "in": "header", "type": "string"}),
        }

    def test_resolves_by_name(self, shared) -> None:
        assert resolve_parameter_ref("#/parameters/limit", shared) is shared["limit"]

    def test_unescapes_segment(self, shared) -> None:
        assert resolve_parameter_ref("#/parameters/a~1b", shared) is shared["a/b"]

    def test_unknown_name(self, shared) -> None:
        assert resolve_parameter_ref("#/parameters/offset", shared) is None

    def test_other_sections(self, shared) -> None:
        assert resolve_parameter_ref("#/definitions/limit", shared) is None

    def test_deeper_pointer(self, shared) -> None:
        assert resolve_parameter_ref("#/parameters/limit/name", shared) is None

    def test_no_shared_parameters(self) -> None:
        assert resolve_parameter_ref("#/parameters/limit", None) is None


def test_unescape_order() -> None:
    assert unescape_segment("~01") == "~1"
