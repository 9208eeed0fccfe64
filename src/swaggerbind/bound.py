"""The result container produced by binding data to an object schema."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator


class BoundContainer(Mapping):
    """A named, ordered bag of bound properties.

    ``type_name`` is the name of the ``$ref`` target the data was bound to
    (``"Pet"``), or the schema's own type tag when the schema was inline
    (``"object"``), or ``""`` when neither is known. Property values are
    nested containers, lists of bound values, or raw data.

    Properties can be read as mapping items or as attributes::

        pet["name"] == pet.name

    :meth:`set_property` is used by the resolver while it builds the
    container; once :meth:`~swaggerbind.resolver.SchemaResolver.bind`
    returns, the container is not modified again.
    """

    __slots__ = ("_type_name", "_properties")

    def __init__(self, type_name: str = "") -> None:
        self._type_name = type_name
        self._properties: dict[str, Any] = {}

    @property
    def type_name(self) -> str:
        return self._type_name

    def set_property(self, name: str, value: Any) -> None:
        self._properties[name] = value

    def __getitem__(self, name: str) -> Any:
        return self._properties[name]

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails, so slots and methods win.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._properties[name]
        except KeyError:
            raise AttributeError(
                f"{self._type_name or 'BoundContainer'} has no property '{name}'"
            ) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoundContainer):
            return (
                self._type_name == other._type_name
                and self._properties == other._properties
            )
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BoundContainer({self._type_name!r}, {self._properties!r})"

    def to_dict(self, include_type: bool = False) -> dict[str, Any]:
        """Convert to plain dicts and lists, recursively.

        Args:
            include_type: Add each container's ``type_name`` under a
                ``"__type__"`` key.
        """
        result: dict[str, Any] = {}
        if include_type:
            result["__type__"] = self._type_name
        for name, value in self._properties.items():
            result[name] = to_plain(value, include_type)
        return result


def to_plain(value: Any, include_type: bool = False) -> Any:
    """Convert a bind result (container, list, or raw value) to plain data."""
    if isinstance(value, BoundContainer):
        return value.to_dict(include_type)
    if isinstance(value, list):
        return [to_plain(item, include_type) for item in value]
    return value
