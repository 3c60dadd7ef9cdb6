"""Typer application and CLI entry point for swagger-convert.

The CLI has a single command::

    swagger-convert SWAGGER [--out PATH]

``SWAGGER`` is a file path, an ``http(s)://`` URL or ``-`` for stdin. The
OpenAPI document is written to ``--out`` (default ``./openapi.json``);
an existing file is never overwritten. Warnings logged by the converter are
printed on stderr through :mod:`swagger_convert.output`, like every other
diagnostic.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a signal handler and invokes the Typer app.
Known errors exit with their ``exit_code``; anything unexpected prints a
traceback to stderr and exits with code 1.

See Also:
    :mod:`swagger_convert.convert`: The conversion engine.
    :mod:`swagger_convert.output`: Diagnostics and file output.
"""

from __future__ import annotations

import signal
import sys
import traceback
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from swagger_convert.config import DEFAULT_OUTPUT_PATH, ConvertConfig
from swagger_convert.convert import convert_document
from swagger_convert.exceptions import InvalidUsageError, SwaggerConvertError
from swagger_convert.exit_codes import EXIT_GENERIC_FAILURE
from swagger_convert.output import (
    OutputManager,
    error,
    forward_logging,
    info,
    set_output,
    success,
    write_json,
)
from swagger_convert.parser import load_spec, validate_swagger_version

app = typer.Typer(
    name="swagger-convert",
    help="Convert a Swagger 2.0 document into an OpenAPI 3.1 document.",
    add_completion=False,
    rich_markup_mode="rich",
)


def run_conversion(config: ConvertConfig) -> dict[str, Any]:
    """Load, convert and write one document.

    Args:
        config: The validated command inputs.

    Returns:
        The OpenAPI document that was written.

    Raises:
        SwaggerConvertError: On any load, parse or write failure.
    """
    raw = load_spec(config.source)
    validate_swagger_version(raw)

    document = convert_document(raw)

    info(f"Writing OpenAPI file to {config.out}")
    write_json(config.out, document)
    return document


def _build_config(source: str, out: Path) -> ConvertConfig:
    try:
        return ConvertConfig(source=source, out=out)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors(include_url=False)
        )
        raise InvalidUsageError(f"Invalid arguments: {problems}") from exc


@app.command()
def convert_command(
    swagger: str = typer.Argument(
        ...,
        metavar="SWAGGER",
        help="Swagger 2.0 document: a file path, an http(s) URL, or '-' for stdin.",
    ),
    out: Path = typer.Option(
        DEFAULT_OUTPUT_PATH,
        "--out",
        "-o",
        help="Where to write the OpenAPI document. The file must not exist.",
    ),
) -> None:
    """Convert a Swagger 2.0 document into an OpenAPI 3.1 document.

    Parts of the document that have no OpenAPI 3.1 equivalent are dropped
    with a warning on stderr; the rest is still converted.

    Example::

        swagger-convert petstore.yaml -o petstore.openapi.json
    """
    set_output(OutputManager())

    try:
        config = _build_config(swagger, out)
        with forward_logging():
            run_conversion(config)
    except SwaggerConvertError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success("Done.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``swagger-convert`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception:
        traceback.print_exc(file=sys.stderr)
        error("Unexpected error while converting the document.")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
