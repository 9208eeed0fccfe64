"""JSON pointers and ``$ref`` values.

A Swagger ``$ref`` such as ``"common.yaml#/definitions/Error"`` has two
parts: an optional document URI (``common.yaml``) and a JSON pointer
fragment (``/definitions/Error``). :class:`Reference` keeps both;
:class:`JsonPointer` holds the decoded pointer segments.

RFC 6901 escaping is applied in both directions: ``~1`` decodes to ``/``
and ``~0`` decodes to ``~``.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel, ConfigDict

from swaggerbind.exceptions import SpecParseError, UnsupportedPointerSegmentError


def _decode_segment(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def _encode_segment(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


class JsonPointer(BaseModel):
    """An ordered, immutable sequence of decoded pointer segments.

    Example::

        pointer = JsonPointer.from_string("#/definitions/Pet")
        pointer.get_segment(0)  # "definitions"
        pointer.get_segment(1)  # "Pet"
    """

    model_config = ConfigDict(frozen=True)

    segments: tuple[str, ...] = ()

    @classmethod
    def from_string(cls, value: str) -> JsonPointer:
        """Parse a pointer string, with or without the leading ``#``.

        Args:
            value: A pointer such as ``"#/definitions/Pet"`` or
                ``"/definitions/Pet"``. The empty pointer (``""`` or
                ``"#"``) has no segments.

        Raises:
            SpecParseError: If a non-empty pointer does not start with ``/``.
        """
        body = value[1:] if value.startswith("#") else value
        if not body:
            return cls()
        if not body.startswith("/"):
            raise SpecParseError(f"Invalid JSON pointer '{value}': must start with '/'")
        return cls(segments=tuple(_decode_segment(s) for s in body[1:].split("/")))

    def get_segment(self, index: int) -> str:
        """Return the segment at *index*.

        Raises:
            UnsupportedPointerSegmentError: If the pointer has no such segment.
        """
        if index < 0 or index >= len(self.segments):
            raise UnsupportedPointerSegmentError(None, pointer=str(self))
        return self.segments[index]

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return "#" + "".join("/" + _encode_segment(s) for s in self.segments)


class Reference(BaseModel):
    """A parsed ``$ref``: an optional external URI plus a pointer.

    A reference without a URI is *local* and resolves against the document
    that contains it. A reference with a URI is *external* and needs a
    relative resolver registered for exactly that URI. An external
    reference may omit the pointer (``"pet.json"``) to name the whole
    document.
    """

    model_config = ConfigDict(frozen=True)

    uri: Optional[str] = None
    pointer: JsonPointer = JsonPointer()

    @classmethod
    def parse(cls, value: str) -> Reference:
        """Parse a ``$ref`` string.

        Args:
            value: ``"#/definitions/Pet"`` (local),
                ``"common.json#/definitions/Error"`` (external), or
                ``"pet.json"`` (a whole external document).

        Raises:
            SpecParseError: If a local reference has an empty pointer.
        """
        uri, _, fragment = value.partition("#")
        pointer = JsonPointer.from_string(fragment)
        if not uri and not len(pointer):
            raise SpecParseError(f"Invalid $ref '{value}': the pointer is empty")
        return cls(uri=uri or None, pointer=pointer)

    def has_uri(self) -> bool:
        return self.uri is not None

    @property
    def name(self) -> str:
        """The target name.

        The last pointer segment (``"Pet"`` for ``#/definitions/Pet``), or
        the document's file stem when the pointer is empty (``"Pet"`` for
        ``models/Pet.yaml``).
        """
        if self.pointer.segments:
            return self.pointer.segments[-1]
        return PurePosixPath(self.uri or "").stem

    def __str__(self) -> str:
        if not self.pointer.segments:
            return self.uri or "#"
        return f"{self.uri or ''}{self.pointer}"
