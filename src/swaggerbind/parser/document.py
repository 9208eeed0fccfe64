"""Build a :class:`~swaggerbind.nodes.Document` from a raw Swagger dict.

:func:`parse_document` is the bridge between :mod:`~swaggerbind.parser.loader`
(which produces plain dicts) and the typed node tree the resolver works on.
Validation is done by the Pydantic node models; their errors are reported
as :class:`~swaggerbind.exceptions.SpecParseError`.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from swaggerbind.exceptions import SpecParseError
from swaggerbind.nodes import Document
from swaggerbind.parser.loader import validate_swagger_version

logger = logging.getLogger(__name__)


def parse_document(raw: dict[str, Any], validate_version: bool = True) -> Document:
    """Validate *raw* and return the typed document tree.

    Args:
        raw: The document dictionary, as returned by
            :func:`~swaggerbind.parser.loader.load_spec`.
        validate_version: Check the ``swagger`` field first. Pass ``False``
            for fragment documents (e.g. a file holding only shared
            ``definitions``) that are only used as ``$ref`` targets.

    Returns:
        The parsed :class:`~swaggerbind.nodes.Document`.

    Raises:
        SpecParseError: If the version is unsupported, a ``$ref`` is
            malformed, or a section has the wrong shape.

    Example::

        document = parse_document(load_spec("petstore.yaml"))
        document.get_definitions().get("Pet")
    """
    if validate_version:
        validate_swagger_version(raw)

    try:
        document = Document.model_validate(raw)
    except ValidationError as exc:
        raise SpecParseError(f"Invalid Swagger document: {exc}") from exc

    logger.debug(
        "Parsed document: %d paths, %d definitions, %d parameters, %d responses",
        len(document.paths or {}),
        len(document.definitions or {}),
        len(document.parameters or {}),
        len(document.responses or {}),
    )
    return document
