"""swaggerbind -- resolve Swagger 2.0 ``$ref`` pointers and bind raw data to schemas.

Given a parsed Swagger document and a blob of untyped data (decoded JSON or
YAML), swaggerbind follows ``$ref`` pointers -- local ones and ones into
separately registered documents -- down to their concrete schemas, then
walks the data alongside the schema to produce named, typed
:class:`~swaggerbind.bound.BoundContainer` trees.

Typical usage::

    from swaggerbind.parser import load_spec, parse_document
    from swaggerbind.resolver import SchemaResolver

    document = parse_document(load_spec("petstore.yaml"))
    resolver = SchemaResolver(document)
    pet = resolver.bind(document.get_definitions().get("Pet"), data)
    pet.type_name  # "Pet"

Modules:
    app: Typer application and CLI entry point.
    nodes: Pydantic models for the Swagger document tree.
    pointer: JSON pointers and ``$ref`` values.
    registry: Relative resolver registry for external documents.
    resolver: Reference resolution and data binding.
    bound: The bound-data container.
    parser: Document loading (URL, file, stdin) and node-tree parsing.
    workspace: Builds resolvers from a document plus its external documents.
    models: Configuration models.
    config: XDG-aware configuration and profile management.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
