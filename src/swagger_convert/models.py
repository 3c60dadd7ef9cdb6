"""Pydantic models describing a Swagger 2.0 source document.

This is the single source of truth for the shape of the input. A raw document
(the dict returned by :func:`~swagger_convert.parser.loader.load_spec`) is
validated once into a :class:`Swagger` tree, and the converters in
:mod:`swagger_convert.convert` only ever read these models.

The models fall into four groups:

**Shared building blocks** -- :class:`ExtensibleModel` (collects ``x-`` keys
into ``.extensions``) and :class:`Reference` (a ``$ref`` pointer).

**Schemas** -- :class:`ArraySchema`, :class:`ObjectSchema` and
:class:`AllOfSchema`. Swagger schemas carry no variant tag, so the variant is
picked by :func:`resolve_schema`, which tries each shape in a fixed order
and keeps the first one that validates.

**Parameters, responses and paths** -- :class:`Parameter` (with a
:class:`GenericLocation` or :class:`BodyLocation`), :class:`ParameterShape`
(or :class:`MalformedShape`), :class:`Header`, :class:`Response`,
:class:`Responses`, :class:`Operation` and :class:`PathItem`.

**Document level** -- :class:`Info`, :class:`Tag`, :class:`ExternalDocs`,
:class:`OAuth2Scheme` with its four flow models, and the root
:class:`Swagger`.

Attributes are snake_case; the camelCase Swagger keys are accepted through
``alias_generator=to_camel``. Unknown non-extension keys are ignored.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainValidator,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from swagger_convert.exceptions import SchemaResolutionError
from swagger_convert.extensions import extract_extensions, is_extension_key

REF_KEY = "$ref"

JsonType = Literal["string", "number", "integer", "boolean", "array", "object", "null"]

Number = Union[int, float]


# --- Shared building blocks ---


class ExtensibleModel(BaseModel):
    """Base for every Swagger object that may carry vendor extensions.

    Before field validation, all ``x-`` keys of the incoming mapping are copied
    into the ``extensions`` field. Other unknown keys are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    extensions: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_extensions(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {**data, "extensions": extract_extensions(data)}
        return data


class Reference(BaseModel):
    """A JSON pointer to another node of the same document.

    Only internal pointers (``#/...``) are accepted; the pointer is kept as a
    plain string and rewritten later by
    :func:`~swagger_convert.convert.references.rewrite_ref`.
    """

    model_config = ConfigDict(populate_by_name=True)

    ref: str = Field(alias=REF_KEY)

    @field_validator("ref")
    @classmethod
    def _internal_only(cls, value: str) -> str:
        if not value.startswith("#/"):
            raise ValueError(
                f"only internal references (#/...) are supported, got {value!r}"
            )
        return value


# --- Schema resolution ---


def parse_schema_or_ref(value: Any) -> Union[Reference, Schema]:
    """Parse a Reference-or-Schema node.

    A mapping with a ``$ref`` key is a :class:`Reference`; anything else goes
    through :func:`resolve_schema`.
    """
    if isinstance(value, (Reference, *SCHEMA_VARIANTS)):
        return value
    if isinstance(value, dict) and REF_KEY in value:
        return Reference.model_validate(value)
    return resolve_schema(value)


def resolve_schema(node: Any) -> Schema:
    """Resolve an untagged schema node into exactly one schema variant.

    The variants are attempted in the order of :data:`SCHEMA_VARIANTS`
    (array, object, allOf) and the first one whose model validates wins.
    Real documents rely on this order: ``{"type": "array"}`` without
    ``items`` ends up as an object schema, and a node with both ``type`` and
    ``allOf`` is an object schema whose ``allOf`` is ignored.

    Args:
        node: A raw schema mapping.

    Returns:
        An :class:`ArraySchema`, :class:`ObjectSchema` or :class:`AllOfSchema`.

    Raises:
        SchemaResolutionError: If *node* is not a mapping or matches none of
            the variants.
    """
    if isinstance(node, SCHEMA_VARIANTS):
        return node
    if not isinstance(node, dict):
        raise SchemaResolutionError(
            f"expected a schema object, got {type(node).__name__}"
        )

    rejected: list[str] = []
    for variant in SCHEMA_VARIANTS:
        try:
            return variant.model_validate(node)
        except ValidationError as exc:
            rejected.append(f"{variant.__name__}: {exc.errors()[0]['msg']}")

    raise SchemaResolutionError(
        "schema matches none of the array, object or allOf shapes "
        f"(keys: {sorted(map(str, node))}; {'; '.join(rejected)})"
    )


class UntypedAdditionalProperties(BaseModel):
    """An ``additionalProperties`` mapping that is neither a schema nor a reference.

    Kept only so the converter can replace it with an empty schema.
    """

    raw: dict[str, Any]


def parse_additional_properties(
    value: Any,
) -> Union[Reference, Schema, bool, UntypedAdditionalProperties]:
    """Parse ``additionalProperties``: schema or reference, then boolean, then any mapping."""
    if isinstance(value, (bool, UntypedAdditionalProperties, Reference, *SCHEMA_VARIANTS)):
        return value
    try:
        return parse_schema_or_ref(value)
    except ValueError:
        pass
    if isinstance(value, dict):
        return UntypedAdditionalProperties(raw=value)
    raise ValueError(
        "additionalProperties must be a schema, a reference, a boolean or an "
        f"object, got {type(value).__name__}"
    )


SchemaOrRef = Annotated[Any, PlainValidator(parse_schema_or_ref)]
AdditionalProperties = Annotated[Any, PlainValidator(parse_additional_properties)]


class ArraySchema(ExtensibleModel):
    """A schema whose ``type`` is ``array``; ``items`` is required."""

    schema_type: Literal["array"] = Field(alias="type")
    items: SchemaOrRef
    title: Optional[str] = None
    description: Optional[str] = None
    example: Any = None
    default: Any = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: bool = False
    xml: Optional[dict[str, Any]] = None


class ObjectSchema(ExtensibleModel):
    """Any schema with a declared ``type`` (object, primitive or a type list).

    Swagger 2.0 expresses exclusive bounds as booleans next to
    ``maximum``/``minimum``; numeric bounds are accepted as well.
    """

    schema_type: Union[JsonType, list[JsonType]] = Field(alias="type")
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None

    multiple_of: Optional[Number] = None
    maximum: Optional[Number] = None
    exclusive_maximum: Union[bool, Number, None] = None
    minimum: Optional[Number] = None
    exclusive_minimum: Union[bool, Number, None] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None

    required: list[str] = Field(default_factory=list)
    enum_values: Optional[list[Any]] = Field(default=None, alias="enum")

    properties: dict[str, SchemaOrRef] = Field(default_factory=dict)
    additional_properties: Optional[AdditionalProperties] = None

    read_only: Optional[bool] = None
    xml: Optional[dict[str, Any]] = None
    example: Any = None


class AllOfSchema(ExtensibleModel):
    """A composition of sub-schemas with an optional discriminator property name."""

    all_of: list[SchemaOrRef] = Field(alias="allOf")
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    example: Any = None
    discriminator: Optional[str] = None


Schema = Union[ArraySchema, ObjectSchema, AllOfSchema]

SCHEMA_VARIANTS: tuple[type[BaseModel], ...] = (ArraySchema, ObjectSchema, AllOfSchema)
"""Schema variants in resolution order. The order is part of the contract."""


# --- Parameters ---


class ParameterLocation(str, enum.Enum):
    """Values of a Swagger 2.0 parameter's ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    FORM_DATA = "formData"
    BODY = "body"


class ParameterShape(ExtensibleModel):
    """The schema-like fields shared by non-body parameters and headers.

    ``type`` is loose here: whether a shape can be expressed as an OpenAPI
    schema is decided by
    :func:`~swagger_convert.convert.schema.convert_parameter_shape`. Shapes
    are parsed through :func:`parse_parameter_shape`, so a malformed field
    only affects its own parameter or header.
    """

    schema_type: Optional[str] = Field(default=None, alias="type")
    format: Optional[str] = None
    items: Optional[ParameterShape] = None
    allow_empty_value: Optional[bool] = None
    collection_format: Optional[str] = None
    default: Any = None

    maximum: Optional[Number] = None
    exclusive_maximum: Union[bool, Number, None] = None
    minimum: Optional[Number] = None
    exclusive_minimum: Union[bool, Number, None] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: Optional[bool] = None
    enum_values: Optional[list[Any]] = Field(default=None, alias="enum")
    multiple_of: Optional[Number] = None


class MalformedShape(BaseModel):
    """A parameter or header shape whose fields failed validation.

    Kept only so the converter can drop that one parameter or header.
    """

    raw: dict[str, Any]
    problem: str


def parse_parameter_shape(value: Any) -> Union[ParameterShape, MalformedShape]:
    """Parse a parameter or header shape without failing the whole document.

    A mapping that does not validate as a :class:`ParameterShape` (for
    example ``maximum: "ten"`` or ``items: "string"``) becomes a
    :class:`MalformedShape` naming the first offending field.
    """
    if isinstance(value, (ParameterShape, MalformedShape)):
        return value
    if not isinstance(value, dict):
        raise ValueError(f"expected a parameter object, got {type(value).__name__}")
    try:
        return ParameterShape.model_validate(value)
    except ValidationError as exc:
        first = exc.errors(include_url=False)[0]
        location = ".".join(str(part) for part in first["loc"]) or "<shape>"
        return MalformedShape(raw=value, problem=f"{location}: {first['msg']}")


ShapeOrMalformed = Annotated[Any, PlainValidator(parse_parameter_shape)]


class GenericLocation(BaseModel):
    """Location of a query, header, path or formData parameter."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["query", "header", "path", "formData"] = Field(alias="in")
    shape: ShapeOrMalformed


class BodyLocation(BaseModel):
    """Location of a body parameter, which carries a full schema."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["body"] = Field(alias="in")
    schema_: SchemaOrRef = Field(alias="schema")


class Parameter(ExtensibleModel):
    """A Swagger 2.0 *Parameter Object*.

    The flat Swagger mapping is split into the common fields and a
    ``location`` variant chosen by ``in``. An unknown ``in`` value fails
    validation.
    """

    name: str
    description: Optional[str] = None
    required: bool = False
    location: Union[GenericLocation, BodyLocation]

    @model_validator(mode="before")
    @classmethod
    def _split_location(cls, data: Any) -> Any:
        if isinstance(data, dict) and "location" not in data:
            if data.get("in") == ParameterLocation.BODY.value:
                location = {key: data[key] for key in ("in", "schema") if key in data}
            else:
                location = {"in": data.get("in"), "shape": data}
            data = {**data, "location": location}
        return data

    @property
    def kind(self) -> ParameterLocation:
        """The parameter's ``in`` value."""
        return ParameterLocation(self.location.kind)


ParameterOrRef = Union[Reference, Parameter]


# --- Responses ---


class Header(ExtensibleModel):
    """A response header: a description plus a parsed shape."""

    description: Optional[str] = None
    shape: ShapeOrMalformed

    @model_validator(mode="before")
    @classmethod
    def _wrap_shape(cls, data: Any) -> Any:
        if isinstance(data, dict) and "shape" not in data:
            data = {**data, "shape": data}
        return data


class Response(ExtensibleModel):
    """A Swagger 2.0 *Response Object*."""

    description: str
    schema_: Optional[SchemaOrRef] = Field(default=None, alias="schema")
    headers: Optional[dict[str, Header]] = None
    examples: Optional[dict[str, Any]] = None


ResponseOrRef = Union[Reference, Response]


class Responses(ExtensibleModel):
    """An operation's responses: an optional ``default`` plus status-code entries.

    Status codes are collected into ``statuses`` (keys coerced to strings,
    since YAML reads ``200:`` as an integer).
    """

    default: Optional[ResponseOrRef] = None
    statuses: dict[str, ResponseOrRef] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_statuses(cls, data: Any) -> Any:
        if isinstance(data, dict) and "statuses" not in data:
            reserved = ("default", "extensions")
            statuses = {
                str(key): value
                for key, value in data.items()
                if key not in reserved and not is_extension_key(key)
            }
            data = {
                key: value
                for key, value in data.items()
                if key in reserved or is_extension_key(key)
            }
            data["statuses"] = statuses
        return data


# --- Paths ---


class ExternalDocs(BaseModel):
    """An *External Documentation Object*, carried through unchanged."""

    model_config = ConfigDict(extra="allow")

    url: str


class Operation(ExtensibleModel):
    """A Swagger 2.0 *Operation Object* (one HTTP verb of a path)."""

    tags: Optional[list[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = None
    operation_id: Optional[str] = None
    consumes: Optional[list[str]] = None
    produces: Optional[list[str]] = None
    parameters: Optional[list[ParameterOrRef]] = None
    responses: Responses
    schemes: Optional[list[str]] = None
    deprecated: Optional[bool] = None
    security: Optional[list[dict[str, list[str]]]] = None


class PathItem(ExtensibleModel):
    """A Swagger 2.0 *Path Item Object*: up to eight operations plus shared parameters."""

    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    parameters: Optional[list[ParameterOrRef]] = None


# --- Security ---


class _FlowModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImplicitFlow(_FlowModel):
    flow: Literal["implicit"]
    authorization_url: str


class PasswordFlow(_FlowModel):
    flow: Literal["password"]
    token_url: str


class ApplicationFlow(_FlowModel):
    flow: Literal["application"]
    token_url: str


class AccessCodeFlow(_FlowModel):
    flow: Literal["accessCode"]
    authorization_url: str
    token_url: str


OAuth2Flow = Annotated[
    Union[ImplicitFlow, PasswordFlow, ApplicationFlow, AccessCodeFlow],
    Field(discriminator="flow"),
]


class OAuth2Scheme(ExtensibleModel):
    """An OAuth2 *Security Scheme Object*.

    OAuth2 is the only supported scheme type; any other ``type`` fails
    validation of the whole document. The grant-specific fields are parsed
    into ``grant`` according to the ``flow`` tag.
    """

    scheme_type: Literal["oauth2"] = Field(alias="type")
    description: Optional[str] = None
    grant: OAuth2Flow
    scopes: Optional[dict[str, str]] = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_grant(cls, data: Any) -> Any:
        if isinstance(data, dict) and "grant" not in data:
            data = {**data, "grant": data}
        return data


SecurityScheme = OAuth2Scheme


# --- Document ---


class TransferScheme(str, enum.Enum):
    """Transfer protocols allowed in a Swagger 2.0 ``schemes`` list."""

    HTTP = "http"
    HTTPS = "https"
    WS = "ws"
    WSS = "wss"


class Info(BaseModel):
    """The *Info Object*, carried through unchanged apart from type checks."""

    model_config = ConfigDict(extra="allow")

    title: str
    version: str

    @field_validator("version", mode="before")
    @classmethod
    def _numeric_version(cls, value: Any) -> Any:
        # YAML reads `version: 1.0` as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Tag(BaseModel):
    """A *Tag Object*, carried through unchanged."""

    model_config = ConfigDict(extra="allow")

    name: str


class Swagger(ExtensibleModel):
    """Root of a Swagger 2.0 document.

    Only the version tag ``"2.0"`` is accepted. Vendor extension keys inside
    ``paths`` are dropped so that every remaining key is a URL path.

    See Also:
        :func:`~swagger_convert.parser.loader.parse_swagger`: Validate a raw
        dict into this model with readable errors.
        :func:`~swagger_convert.convert.document.convert`: Turn it into an
        OpenAPI document.
    """

    swagger: Literal["2.0"]
    info: Info
    host: Optional[str] = None
    base_path: Optional[str] = None
    schemes: Optional[list[TransferScheme]] = None
    consumes: Optional[list[str]] = None
    produces: Optional[list[str]] = None
    paths: dict[str, PathItem]
    definitions: Optional[dict[str, SchemaOrRef]] = None
    parameters: Optional[dict[str, Parameter]] = None
    responses: Optional[dict[str, ResponseOrRef]] = None
    security_definitions: dict[str, SecurityScheme] = Field(default_factory=dict)
    security: Optional[list[dict[str, list[str]]]] = None
    tags: Optional[list[Tag]] = None
    external_docs: Optional[ExternalDocs] = None

    @field_validator("swagger", mode="before")
    @classmethod
    def _numeric_swagger(cls, value: Any) -> Any:
        # YAML reads `swagger: 2.0` as a float
        if isinstance(value, float):
            return str(value)
        return value

    @field_validator("paths", mode="before")
    @classmethod
    def _drop_path_extensions(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                str(key): item
                for key, item in value.items()
                if not is_extension_key(key)
            }
        return value
