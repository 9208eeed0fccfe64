"""Resolve ``$ref`` references and bind raw data to Swagger schemas.

:class:`SchemaResolver` is the core of swaggerbind. It wraps one parsed
:class:`~swaggerbind.nodes.Document` and a
:class:`~swaggerbind.registry.RelativeResolverRegistry` for references into
other documents, and exposes four operations:

* :meth:`~SchemaResolver.resolve` -- follow a node's ``$ref`` chain to the
  terminal node.
* :meth:`~SchemaResolver.find_type_at_pointer` -- look up
  ``#/<section>/<key>`` in the document.
* :meth:`~SchemaResolver.find_schema_for_operation_response` -- pick the
  response schema for a status code, falling back to ``default``.
* :meth:`~SchemaResolver.bind` -- walk raw data alongside a schema and
  build :class:`~swaggerbind.bound.BoundContainer` objects and lists.

Property lookup while binding tries, in order: the schema's declared
``properties``, its ``allOf`` members, then its ``additionalProperties``
wildcard. Every ``allOf`` member is searched; when several define the same
property, the last one wins.

Resolution is synchronous and keeps no cache, so one resolver can be
shared between callers as long as nobody mutates the document. A
``max_depth`` guard turns reference cycles into
:class:`~swaggerbind.exceptions.ReferenceDepthExceededError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from swaggerbind.bound import BoundContainer
from swaggerbind.exceptions import (
    ConfigError,
    DataShapeMismatchError,
    InvalidResolverRegistrationError,
    MissingDocumentPropertyError,
    ReferenceDepthExceededError,
    RelativeResolverUnavailableError,
    UndefinedOperationResponseSchemaError,
    UndefinedPropertySchemaError,
    UnsupportedPointerSegmentError,
)
from swaggerbind.nodes import Document, ObjectSchema, Referential, Typed
from swaggerbind.pointer import JsonPointer, Reference
from swaggerbind.registry import RelativeResolverRegistry, ResolvedNode, SubResolver

DEFAULT_MAX_DEPTH = 64

# First pointer segment -> accessor for that document section.
_SECTION_ACCESSORS = {
    "paths": Document.get_paths,
    "definitions": Document.get_definitions,
    "parameters": Document.get_parameters,
    "responses": Document.get_responses,
    "securityDefinitions": Document.get_security_definitions,
}


def _type_tag(node: Any) -> Optional[str]:
    """Return the node's type tag, or ``None`` for untyped nodes."""
    if not isinstance(node, Typed):
        return None
    try:
        return node.get_type()
    except MissingDocumentPropertyError:
        return None


def _has_ref(node: Any) -> bool:
    return isinstance(node, Referential) and node.has_ref()


class SchemaResolver:
    """Reference resolver and data binder for one Swagger document.

    Args:
        document: The parsed document. It is borrowed, never copied or
            modified.
        relative_resolvers: URI to resolver-or-node mapping for external
            references (see :class:`~swaggerbind.registry.RelativeResolverRegistry`).
        max_depth: Maximum length of a reference chain, and maximum nesting
            of ``allOf``/``additionalProperties`` lookups.

    Raises:
        InvalidResolverRegistrationError: If a registry value is neither a
            resolved node nor a resolver.
        ConfigError: If *max_depth* is smaller than 1.

    Example::

        resolver = SchemaResolver(document, {"common.json": common_resolver})
        pet = resolver.bind(Schema(ref="#/definitions/Pet"), {"name": "Rex"})
        pet.type_name  # "Pet"
    """

    def __init__(
        self,
        document: Document,
        relative_resolvers: Union[RelativeResolverRegistry, Mapping[str, Any], None] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 1:
            raise ConfigError(f"max_depth must be at least 1, got {max_depth}")
        self._document = document
        if isinstance(relative_resolvers, RelativeResolverRegistry):
            self._registry = relative_resolvers
        else:
            self._registry = RelativeResolverRegistry(relative_resolvers)
        self._max_depth = max_depth

    @property
    def document(self) -> Document:
        return self._document

    @property
    def relative_resolvers(self) -> RelativeResolverRegistry:
        return self._registry

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def __repr__(self) -> str:
        return f"SchemaResolver(relative_resolvers={self._registry!r}, max_depth={self._max_depth})"

    # ------------------------------------------------------------------ #
    # Reference resolution
    # ------------------------------------------------------------------ #

    def resolve(self, node: Any) -> Any:
        """Follow *node*'s ``$ref`` chain and return the terminal node.

        Nodes without a reference are returned unchanged.

        Raises:
            RelativeResolverUnavailableError: If an external URI has no
                registered resolver.
            UnsupportedPointerSegmentError: If a pointer names an unknown
                section.
            MissingDocumentPropertyError: If a pointer's key is not in its
                section.
            ReferenceDepthExceededError: If the chain is longer than
                ``max_depth``.
        """
        terminal, _, _ = self._follow(node)
        return terminal

    def _follow(self, node: Any) -> tuple[Any, Optional[str], SchemaResolver]:
        """Follow a reference chain.

        Returns:
            ``(terminal_node, target_name, owner)`` where *target_name* is
            the last followed reference's name (``None`` if *node* had no
            reference) and *owner* is the resolver whose document holds
            the terminal node.
        """
        owner = self
        name: Optional[str] = None
        hops = 0
        while _has_ref(node):
            ref = node.get_ref()
            if hops >= self._max_depth:
                raise ReferenceDepthExceededError(self._max_depth, str(ref))
            owner, node = owner._dereference(ref)
            name = ref.name
            hops += 1
        return node, name, owner

    def _dereference(self, ref: Reference) -> tuple[SchemaResolver, Any]:
        """Take one step along a reference chain."""
        if not ref.has_uri():
            return self, self.find_type_at_pointer(ref.pointer)

        uri = ref.uri
        if uri not in self._registry:
            raise RelativeResolverUnavailableError(uri)
        entry = self._registry[uri]
        if isinstance(entry, ResolvedNode):
            return self, entry.node
        if isinstance(entry, SubResolver):
            return entry.resolver, entry.resolver.find_type_at_pointer(ref.pointer)
        raise InvalidResolverRegistrationError(uri, entry)

    # ------------------------------------------------------------------ #
    # Pointer lookup
    # ------------------------------------------------------------------ #

    def find_type_at_pointer(self, pointer: Union[JsonPointer, str]) -> Any:
        """Return the node at ``#/<section>/<key>`` in this resolver's document.

        Args:
            pointer: A :class:`~swaggerbind.pointer.JsonPointer` or pointer
                string such as ``"#/definitions/Pet"``.

        Raises:
            UnsupportedPointerSegmentError: If the first segment is not
                one of ``paths``, ``definitions``, ``parameters``,
                ``responses``, ``securityDefinitions``, or the pointer does
                not have exactly two segments.
            MissingDocumentPropertyError: If the section or key is absent.
        """
        if isinstance(pointer, str):
            pointer = JsonPointer.from_string(pointer)

        section = pointer.get_segment(0)
        accessor = _SECTION_ACCESSORS.get(section)
        if accessor is None:
            raise UnsupportedPointerSegmentError(section, pointer=str(pointer))
        key = pointer.get_segment(1)
        if len(pointer) > 2:
            raise UnsupportedPointerSegmentError(pointer.segments[2], pointer=str(pointer))
        return accessor(self._document).get(key)

    # ------------------------------------------------------------------ #
    # Property resolution
    # ------------------------------------------------------------------ #

    def find_schema_for_property(self, schema: Any, property_name: str) -> Any:
        """Return the sub-schema that describes *property_name* on *schema*.

        Tries the declared ``properties``, then every ``allOf`` member (the
        last member defining the property wins), then the
        ``additionalProperties`` wildcard, resolved and searched the same
        way.

        Raises:
            MissingDocumentPropertyError: If no strategy yields a schema.
        """
        found, _ = self._find_property(schema, property_name, 0)
        return found

    def _find_property(
        self, schema: Any, name: str, depth: int
    ) -> tuple[Any, SchemaResolver]:
        if depth > self._max_depth:
            raise ReferenceDepthExceededError(self._max_depth)
        if not isinstance(schema, ObjectSchema):
            raise MissingDocumentPropertyError(name, owner=type(schema).__name__)

        try:
            return schema.get_property(name), self
        except MissingDocumentPropertyError:
            pass
        try:
            return self._find_in_all_of(schema, name, depth)
        except MissingDocumentPropertyError:
            return self._find_in_additional_properties(schema, name, depth)

    def _find_in_all_of(
        self, schema: Any, name: str, depth: int
    ) -> tuple[Any, SchemaResolver]:
        found: Optional[tuple[Any, SchemaResolver]] = None
        for member in schema.get_all_of():
            member, _, owner = self._follow(member)
            try:
                # No early exit: a later member overrides an earlier one.
                found = owner._find_property(member, name, depth + 1)
            except MissingDocumentPropertyError:
                continue
        if found is None:
            raise MissingDocumentPropertyError(name, owner="allOf")
        return found

    def _find_in_additional_properties(
        self, schema: Any, name: str, depth: int
    ) -> tuple[Any, SchemaResolver]:
        wildcard, _, owner = self._follow(schema.get_additional_properties())
        return owner._find_property(wildcard, name, depth + 1)

    # ------------------------------------------------------------------ #
    # Operation responses
    # ------------------------------------------------------------------ #

    def find_schema_for_operation_response(
        self, operation: Any, status_code: Union[str, int]
    ) -> Any:
        """Return the response schema *operation* declares for *status_code*.

        Falls back to the operation's ``default`` response when the exact
        status is not declared. A response given as ``$ref`` (for example
        ``#/responses/NotFound``) is resolved first.

        Raises:
            UndefinedOperationResponseSchemaError: If neither the status nor
                ``default`` is declared, or the chosen response has no
                ``schema``.
        """
        schema, _ = self._find_response_schema(operation, str(status_code))
        return schema

    def _find_response_schema(
        self, operation: Any, status: str
    ) -> tuple[Any, SchemaResolver]:
        try:
            operation_id: Optional[str] = operation.get_operation_id()
        except MissingDocumentPropertyError:
            operation_id = None

        try:
            responses = operation.get_responses()
            try:
                response = responses.get_http_status_code(status)
            except MissingDocumentPropertyError:
                # Not declared, but the operation may have a default.
                response = responses.get_default()
        except MissingDocumentPropertyError:
            raise UndefinedOperationResponseSchemaError(operation_id, status) from None

        response, _, owner = self._follow(response)
        get_schema = getattr(response, "get_schema", None)
        if get_schema is None:
            raise UndefinedOperationResponseSchemaError(operation_id, status)
        try:
            return get_schema(), owner
        except MissingDocumentPropertyError:
            raise UndefinedOperationResponseSchemaError(operation_id, status) from None

    # ------------------------------------------------------------------ #
    # Data binding
    # ------------------------------------------------------------------ #

    def bind(self, node: Any, data: Any) -> Any:
        """Bind raw *data* to the schema *node*.

        * Array schemas produce a list, binding each element to ``items``
          in input order.
        * Object schemas produce a :class:`~swaggerbind.bound.BoundContainer`
          named after the ``$ref`` target (or the schema's type tag), with
          one bound value per key of *data*, in the data's key order.
        * Anything else -- primitives, untyped schemas, parameters,
          responses -- returns *data* unchanged. ``None`` is always
          returned unchanged.

        Raises:
            UndefinedPropertySchemaError: If *data* has a key that no
                declared property, ``allOf`` member, or wildcard describes.
            DataShapeMismatchError: If an object schema meets non-mapping
                data, or an array schema meets a non-list.
            ResolutionError: Any reference failure, unchanged.
        """
        if _has_ref(node):
            terminal, type_name, owner = self._follow(node)
        else:
            terminal, type_name, owner = node, _type_tag(node), self
        return owner._bind_terminal(terminal, type_name or "", data)

    def bind_operation_response(
        self, operation: Any, status_code: Union[str, int], data: Any
    ) -> Any:
        """Bind a response body to the schema *operation* declares for *status_code*."""
        schema, owner = self._find_response_schema(operation, str(status_code))
        return owner.bind(schema, data)

    def _bind_terminal(self, node: Any, type_name: str, data: Any) -> Any:
        if data is None:
            return None

        if _type_tag(node) == "array":
            if not isinstance(data, (list, tuple)):
                raise DataShapeMismatchError("array", data)
            items = node.get_items()
            return [self.bind(items, value) for value in data]

        if isinstance(node, ObjectSchema) and node.is_object_schema():
            if not isinstance(data, Mapping):
                raise DataShapeMismatchError("object", data)
            container = BoundContainer(type_name)
            for key, value in data.items():
                name = str(key)
                try:
                    schema, owner = self._find_property(node, name, 0)
                except MissingDocumentPropertyError:
                    raise UndefinedPropertySchemaError(name, node) from None
                container.set_property(name, owner.bind(schema, value))
            return container

        return data
