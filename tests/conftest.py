"""Shared test fixtures for swagger_convert.

Provides reusable fixtures for loading golden document pairs, building
small Swagger documents, managing output state, and running the CLI.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest
from typer.testing import CliRunner

from swagger_convert.output import reset_output

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches a reference to sys.stderr at creation time.
    When Typer's CliRunner redirects that stream during a test and the test
    finishes, the cached reference becomes stale ("I/O operation on closed
    file"). Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def minimal_swagger() -> dict[str, Any]:
    """The smallest valid Swagger 2.0 document."""
    with open(FIXTURES_DIR / "minimal.swagger.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def parameters_swagger() -> dict[str, Any]:
    """A document with one operation using every parameter location."""
    with open(FIXTURES_DIR / "parameters.swagger.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def make_swagger() -> Callable[..., dict[str, Any]]:
    """Factory for small Swagger documents.

    Keyword arguments are merged into a minimal document, e.g.
    ``make_swagger(definitions={"Pet": {"type": "object"}})``.
    """

    def _make(**fields: Any) -> dict[str, Any]:
        document: dict[str, Any] = {
            "swagger": "2.0",
            "info": {"title": "Test API", "version": "1.0"},
            "paths": {},
        }
        document.update(fields)
        return document

    return _make


@pytest.fixture
def make_operation_swagger(
    make_swagger: Callable[..., dict[str, Any]],
) -> Callable[..., dict[str, Any]]:
    """Factory for a document with a single ``GET /items`` operation.

    Keyword arguments are merged into the operation object.
    """

    def _make(**operation_fields: Any) -> dict[str, Any]:
        operation: dict[str, Any] = {"responses": {"200": {"description": "OK"}}}
        operation.update(operation_fields)
        return make_swagger(paths={"/items": {"get": operation}})

    return _make


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Typer CLI test runner."""
    return CliRunner()
