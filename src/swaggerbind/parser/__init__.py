"""Swagger document parser -- load raw documents and build the node tree.

Typical usage::

    from swaggerbind.parser import load_spec, parse_document

    raw = load_spec("https://petstore.swagger.io/v2/swagger.json")
    document = parse_document(raw)

Sub-modules:

* :mod:`~swaggerbind.parser.loader` -- I/O layer (URL, file, stdin) plus
  format detection and Swagger version validation.
* :mod:`~swaggerbind.parser.document` -- Validates the raw dict into a
  :class:`~swaggerbind.nodes.Document`.
"""

from swaggerbind.parser.document import parse_document
from swaggerbind.parser.loader import load_data, load_spec, validate_swagger_version

__all__ = ["load_spec", "load_data", "validate_swagger_version", "parse_document"]
