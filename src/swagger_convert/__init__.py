"""swagger_convert -- Convert Swagger 2.0 API descriptions into OpenAPI 3 documents.

The package parses a Swagger 2.0 document into a typed model, rewrites its
internal references, turns body and form parameters into request bodies, and
reassembles everything as an OpenAPI document built with ``openapi-pydantic``.

Typical workflow::

    swagger-convert swagger.json --out openapi.json

Or from Python::

    from swagger_convert.convert import convert_document

    document = convert_document(raw_swagger_dict)

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models describing the Swagger 2.0 source document.
    extensions: Vendor extension (``x-``) filtering.
    convert: The conversion engine (schemas, parameters, responses, ...).
    parser: Loading and validating source documents.
    config: Conversion defaults and the :class:`ConvertConfig` model.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stderr diagnostics and JSON file output.
"""

__version__ = "0.1.0"
