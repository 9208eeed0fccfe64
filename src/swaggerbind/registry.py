"""Relative resolver registry: how external ``$ref`` URIs are satisfied.

A reference like ``"common.json#/definitions/Error"`` names another
document. The registry maps that URI to exactly one of two things:

* :class:`ResolvedNode` -- a node that is already the answer. Every
  reference into that URI resolves to it, regardless of the pointer.
* :class:`SubResolver` -- a :class:`~swaggerbind.resolver.SchemaResolver`
  over the other document, which looks the pointer up itself.

Raw values are classified when the registry is built, so a bad
registration fails at construction rather than on first use.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from swaggerbind.exceptions import InvalidResolverRegistrationError
from swaggerbind.nodes import Node, Referential

if TYPE_CHECKING:
    from swaggerbind.resolver import SchemaResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedNode:
    """A registry entry holding an already-resolved, terminal node."""

    node: Node


@dataclass(frozen=True)
class SubResolver:
    """A registry entry delegating pointer lookups to another resolver."""

    resolver: SchemaResolver


RegistryEntry = Union[ResolvedNode, SubResolver]


def _classify(uri: str, value: Any) -> RegistryEntry:
    from swaggerbind.resolver import SchemaResolver

    if isinstance(value, (ResolvedNode, SubResolver)):
        entry = value
    elif isinstance(value, SchemaResolver):
        entry = SubResolver(value)
    elif isinstance(value, Node):
        entry = ResolvedNode(value)
    else:
        raise InvalidResolverRegistrationError(uri, value)

    if isinstance(entry, SubResolver) and not isinstance(entry.resolver, SchemaResolver):
        raise InvalidResolverRegistrationError(uri, entry.resolver)
    if isinstance(entry, ResolvedNode):
        node = entry.node
        if not isinstance(node, Node):
            raise InvalidResolverRegistrationError(uri, node)
        if isinstance(node, Referential) and node.has_ref():
            # A pre-resolved entry has to be terminal.
            raise InvalidResolverRegistrationError(uri, node)
    return entry


class RelativeResolverRegistry(Mapping):
    """Immutable mapping from document URI to :data:`RegistryEntry`.

    Args:
        entries: URI to value. Values may be :class:`ResolvedNode` or
            :class:`SubResolver` entries, a ``SchemaResolver``, or a
            non-referential :class:`~swaggerbind.nodes.Node`.

    Raises:
        InvalidResolverRegistrationError: If any value is none of the above.

    Example::

        registry = RelativeResolverRegistry({
            "common.json": SchemaResolver(common_document),
            "error.json": error_schema,
        })
    """

    def __init__(self, entries: Optional[Mapping[str, Any]] = None) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        for uri, value in (entries or {}).items():
            self._entries[uri] = _classify(uri, value)
            logger.debug(
                "Registered %s for '%s'", type(self._entries[uri]).__name__, uri
            )

    def __getitem__(self, uri: str) -> RegistryEntry:
        return self._entries[uri]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RelativeResolverRegistry({sorted(self._entries)!r})"
