"""Pydantic models for the Swagger 2.0 document tree.

The resolver never branches on these concrete classes. It asks what a node
*can do* through three runtime-checkable capability protocols:

* :class:`Referential` -- may carry a ``$ref`` (:meth:`has_ref`,
  :meth:`get_ref`).
* :class:`Typed` -- exposes a type tag and, for arrays, an item node
  (:meth:`get_type`, :meth:`get_items`).
* :class:`ObjectSchema` -- declares properties, ``allOf`` members, and an
  ``additionalProperties`` wildcard.

Every ``get_*`` accessor raises
:class:`~swaggerbind.exceptions.MissingDocumentPropertyError` when the
property is not defined, rather than returning ``None``. That signal is
what property resolution relies on to move on to the next strategy.

``$ref`` strings are parsed into :class:`~swaggerbind.pointer.Reference`
values during validation, so a malformed reference fails when the
document is parsed, not when it is first used.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional, Protocol, runtime_checkable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from swaggerbind.exceptions import MissingDocumentPropertyError
from swaggerbind.pointer import Reference


# --- Capabilities ---


@runtime_checkable
class Referential(Protocol):
    """A node that may stand in for another node through ``$ref``."""

    def has_ref(self) -> bool: ...

    def get_ref(self) -> Reference: ...


@runtime_checkable
class Typed(Protocol):
    """A node with a type tag (``"object"``, ``"array"``, ``"string"``, ...)."""

    def get_type(self) -> str: ...

    def get_items(self) -> Any: ...


@runtime_checkable
class ObjectSchema(Protocol):
    """A node that can describe the properties of an object."""

    def is_object_schema(self) -> bool: ...

    def get_property(self, name: str) -> Any: ...

    def get_all_of(self) -> list[Any]: ...

    def get_additional_properties(self) -> Any: ...


# --- Base nodes ---


class Node(BaseModel):
    """Base class of every document node.

    Nodes are immutable once validated. Unknown keys (``x-`` vendor
    extensions, ``example``, ...) are kept in ``model_extra``.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    def _missing(self, name: str) -> MissingDocumentPropertyError:
        return MissingDocumentPropertyError(name, owner=type(self).__name__)


class RefNode(Node):
    """A node that may carry a ``$ref`` instead of (or alongside) its own fields."""

    ref: Optional[Reference] = Field(default=None, alias="$ref")

    @field_validator("ref", mode="before")
    @classmethod
    def _parse_ref(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Reference.parse(value)
        return value

    @field_serializer("ref")
    def _serialize_ref(self, ref: Optional[Reference]) -> Optional[str]:
        return None if ref is None else str(ref)

    def has_ref(self) -> bool:
        return self.ref is not None

    def get_ref(self) -> Reference:
        if self.ref is None:
            raise self._missing("$ref")
        return self.ref


# --- Schema-bearing nodes ---


class Schema(RefNode):
    """A Swagger *Schema Object* (``definitions`` entries, body and response schemas).

    ``additionalProperties: true``/``false`` carries no sub-schema and is
    treated as absent.
    """

    type: Optional[str] = None
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    required: Optional[list[str]] = None
    items: Optional[Schema] = None
    properties: Optional[dict[str, Schema]] = None
    all_of: Optional[list[Schema]] = Field(default=None, alias="allOf")
    additional_properties: Optional[Schema] = Field(
        default=None, alias="additionalProperties"
    )

    @field_validator("additional_properties", mode="before")
    @classmethod
    def _drop_boolean_wildcard(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return None
        return value

    def get_type(self) -> str:
        if self.type is None:
            raise self._missing("type")
        return self.type

    def get_items(self) -> Schema:
        if self.items is None:
            raise self._missing("items")
        return self.items

    def get_properties(self) -> dict[str, Schema]:
        if self.properties is None:
            raise self._missing("properties")
        return self.properties

    def get_property(self, name: str) -> Schema:
        properties = self.get_properties()
        if name not in properties:
            raise self._missing(name)
        return properties[name]

    def get_all_of(self) -> list[Schema]:
        if self.all_of is None:
            raise self._missing("allOf")
        return self.all_of

    def get_additional_properties(self) -> Schema:
        if self.additional_properties is None:
            raise self._missing("additionalProperties")
        return self.additional_properties

    def is_object_schema(self) -> bool:
        """True when the schema describes an object: typed so, or declaring structure."""
        return self.type == "object" or any(
            value is not None
            for value in (self.properties, self.all_of, self.additional_properties)
        )


class Parameter(RefNode):
    """A Swagger *Parameter Object*.

    Non-body parameters are typed directly (``type``/``items``); body
    parameters carry a ``schema``.
    """

    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    description: Optional[str] = None
    required: bool = False
    type: Optional[str] = None
    format: Optional[str] = None
    items: Optional[Schema] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")

    def get_type(self) -> str:
        if self.type is None:
            raise self._missing("type")
        return self.type

    def get_items(self) -> Schema:
        if self.items is None:
            raise self._missing("items")
        return self.items

    def get_schema(self) -> Schema:
        if self.schema_ is None:
            raise self._missing("schema")
        return self.schema_


class Response(RefNode):
    """A Swagger *Response Object*."""

    description: Optional[str] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    headers: dict[str, Any] = Field(default_factory=dict)

    def get_schema(self) -> Schema:
        if self.schema_ is None:
            raise self._missing("schema")
        return self.schema_


class Responses(Node):
    """An operation's *Responses Object*: status codes plus an optional ``default``.

    Accepts the raw Swagger shape (``{"200": {...}, "default": {...}}``);
    status keys are normalised to strings and ``x-`` extensions are skipped.
    """

    default: Optional[Response] = None
    codes: dict[str, Response] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _split_status_codes(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or "codes" in data:
            return data
        codes = {
            str(key): value
            for key, value in data.items()
            if key != "default" and not str(key).startswith("x-")
        }
        return {"default": data.get("default"), "codes": codes}

    def get_http_status_code(self, status_code: str | int) -> Response:
        key = str(status_code)
        if key not in self.codes:
            raise self._missing(key)
        return self.codes[key]

    def get_default(self) -> Response:
        if self.default is None:
            raise self._missing("default")
        return self.default


class Operation(Node):
    """A Swagger *Operation Object*."""

    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    responses: Optional[Responses] = None
    deprecated: bool = False

    def get_operation_id(self) -> str:
        if self.operation_id is None:
            raise self._missing("operationId")
        return self.operation_id

    def get_responses(self) -> Responses:
        if self.responses is None:
            raise self._missing("responses")
        return self.responses


_HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


class PathItem(RefNode):
    """A Swagger *Path Item Object*: one operation per HTTP method."""

    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    parameters: list[Parameter] = Field(default_factory=list)

    def get_operation(self, method: str) -> Operation:
        method = method.lower()
        operation = getattr(self, method, None) if method in _HTTP_METHODS else None
        if operation is None:
            raise self._missing(method)
        return operation

    def iter_operations(self) -> Iterator[tuple[str, Operation]]:
        for method in _HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation


class SecurityScheme(Node):
    """A Swagger *Security Scheme Object* (``basic``, ``apiKey``, ``oauth2``)."""

    type: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    flow: Optional[str] = None
    authorization_url: Optional[str] = Field(default=None, alias="authorizationUrl")
    token_url: Optional[str] = Field(default=None, alias="tokenUrl")
    scopes: dict[str, str] = Field(default_factory=dict)


# --- Document ---


class DocumentSection:
    """Read-only view of one top-level document section (``definitions``, ...).

    Unlike a plain dict, :meth:`get` raises
    :class:`~swaggerbind.exceptions.MissingDocumentPropertyError` naming the
    section when the key is absent.
    """

    def __init__(self, name: str, entries: Mapping[str, Any]):
        self.name = name
        self._entries = entries

    def get(self, key: str) -> Any:
        if key not in self._entries:
            raise MissingDocumentPropertyError(key, owner=self.name)
        return self._entries[key]

    def keys(self):  # noqa: ANN201
        return self._entries.keys()

    def items(self):  # noqa: ANN201
        return self._entries.items()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DocumentSection({self.name!r}, {len(self)} entries)"


class Document(Node):
    """The root of a parsed Swagger 2.0 document.

    Holds the five sections a pointer can address: ``paths``,
    ``definitions``, ``parameters``, ``responses``, and
    ``securityDefinitions``.
    """

    swagger: str = "2.0"
    info: dict[str, Any] = Field(default_factory=dict)
    host: Optional[str] = None
    base_path: Optional[str] = Field(default=None, alias="basePath")
    paths: Optional[dict[str, PathItem]] = None
    definitions: Optional[dict[str, Schema]] = None
    parameters: Optional[dict[str, Parameter]] = None
    responses: Optional[dict[str, Response]] = None
    security_definitions: Optional[dict[str, SecurityScheme]] = Field(
        default=None, alias="securityDefinitions"
    )

    @field_validator("swagger", mode="before")
    @classmethod
    def _version_as_string(cls, value: Any) -> Any:
        # YAML reads an unquoted 2.0 as a float.
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("paths", mode="before")
    @classmethod
    def _skip_path_extensions(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {k: v for k, v in value.items() if not str(k).startswith("x-")}
        return value

    @field_validator(
        "definitions", "parameters", "responses", "security_definitions", mode="before"
    )
    @classmethod
    def _keys_as_strings(cls, value: Any) -> Any:
        # YAML reads unquoted keys such as 404 as integers.
        if isinstance(value, Mapping):
            return {str(k): v for k, v in value.items()}
        return value

    def _section(self, name: str, entries: Optional[Mapping[str, Any]]) -> DocumentSection:
        if entries is None:
            raise MissingDocumentPropertyError(name, owner="document")
        return DocumentSection(name, entries)

    def get_paths(self) -> DocumentSection:
        return self._section("paths", self.paths)

    def get_definitions(self) -> DocumentSection:
        return self._section("definitions", self.definitions)

    def get_parameters(self) -> DocumentSection:
        return self._section("parameters", self.parameters)

    def get_responses(self) -> DocumentSection:
        return self._section("responses", self.responses)

    def get_security_definitions(self) -> DocumentSection:
        return self._section("securityDefinitions", self.security_definitions)

    def iter_operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield ``(path, method, operation)`` for every operation in ``paths``."""
        for path, item in (self.paths or {}).items():
            for method, operation in item.iter_operations():
                yield path, method, operation

    def find_operation(self, operation_id: str) -> Operation:
        """Return the operation whose ``operationId`` equals *operation_id*.

        Raises:
            MissingDocumentPropertyError: If no operation has that id.
        """
        for _, _, operation in self.iter_operations():
            if operation.operation_id == operation_id:
                return operation
        raise MissingDocumentPropertyError(operation_id, owner="paths")


Schema.model_rebuild()
