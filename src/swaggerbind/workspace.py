"""Build ready-to-use resolvers from document sources.

:func:`open_resolver` runs the whole load pipeline: fetch and parse the
main document, fetch and parse every external document named in
``relative_specs``, wrap each external one in its own
:class:`~swaggerbind.resolver.SchemaResolver`, and register those under
their ``$ref`` URIs on the main resolver.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from swaggerbind.parser import load_spec, parse_document
from swaggerbind.resolver import DEFAULT_MAX_DEPTH, SchemaResolver

logger = logging.getLogger(__name__)


def open_resolver(
    spec: str,
    relative_specs: Optional[Mapping[str, str]] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> SchemaResolver:
    """Load *spec* and its external documents and return a resolver over them.

    Args:
        spec: URL, file path, or ``-`` for the main Swagger document.
        relative_specs: External ``$ref`` URI (as written in the document)
            to the URL or file path it should be loaded from. External
            documents may be fragments without a ``swagger`` field.
        max_depth: Depth limit for every resolver created.

    Raises:
        SpecParseError: If any document cannot be loaded or parsed.

    Example::

        resolver = open_resolver(
            "api.yaml", {"common.yaml": "./shared/common.yaml"}
        )
    """
    document = parse_document(load_spec(spec))

    registry: dict[str, SchemaResolver] = {}
    for uri, source in (relative_specs or {}).items():
        logger.debug("Loading external document '%s' from %s", uri, source)
        external = parse_document(load_spec(source), validate_version=False)
        registry[uri] = SchemaResolver(external, max_depth=max_depth)

    return SchemaResolver(document, registry, max_depth=max_depth)
