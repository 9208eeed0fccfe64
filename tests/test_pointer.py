"""Tests for swaggerbind.pointer -- JSON pointers and $ref parsing."""

from __future__ import annotations

import pytest

from swaggerbind.exceptions import SpecParseError, UnsupportedPointerSegmentError
from swaggerbind.pointer import JsonPointer, Reference


# ---------------------------------------------------------------------------
# JsonPointer
# ---------------------------------------------------------------------------


class TestJsonPointer:
    """Parsing, segment access, and string rendering of pointers."""

    def test_from_string_with_hash(self) -> None:
        pointer = JsonPointer.from_string("#/definitions/Pet")
        assert pointer.segments == ("definitions", "Pet")

    def test_from_string_without_hash(self) -> None:
        pointer = JsonPointer.from_string("/parameters/petId")
        assert pointer.segments == ("parameters", "petId")

    def test_empty_pointer(self) -> None:
        assert len(JsonPointer.from_string("")) == 0
        assert len(JsonPointer.from_string("#")) == 0

    def test_decodes_escapes(self) -> None:
        pointer = JsonPointer.from_string("#/paths/~1pets~1{petId}/a~0b")
        assert pointer.segments == ("paths", "/pets/{petId}", "a~b")

    def test_str_re_encodes(self) -> None:
        pointer = JsonPointer(segments=("paths", "/pets", "a~b"))
        assert str(pointer) == "#/paths/~1pets/a~0b"

    def test_missing_leading_slash_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="must start with '/'"):
            JsonPointer.from_string("#definitions/Pet")

    def test_get_segment(self) -> None:
        pointer = JsonPointer.from_string("#/definitions/Pet")
        assert pointer.get_segment(0) == "definitions"
        assert pointer.get_segment(1) == "Pet"

    def test_get_segment_out_of_range(self) -> None:
        pointer = JsonPointer.from_string("#/definitions")
        with pytest.raises(UnsupportedPointerSegmentError) as exc_info:
            pointer.get_segment(1)
        assert exc_info.value.segment is None
        assert exc_info.value.pointer == "#/definitions"

    def test_negative_index_rejected(self) -> None:
        pointer = JsonPointer.from_string("#/definitions/Pet")
        with pytest.raises(UnsupportedPointerSegmentError):
            pointer.get_segment(-1)

    def test_is_hashable_and_comparable(self) -> None:
        a = JsonPointer.from_string("#/definitions/Pet")
        b = JsonPointer(segments=("definitions", "Pet"))
        assert a == b
        assert len({a, b}) == 1


# ---------------------------------------------------------------------------
# Reference
# ---------------------------------------------------------------------------


class TestReference:
    """Local and external $ref values."""

    def test_local_reference(self) -> None:
        ref = Reference.parse("#/definitions/Pet")
        assert ref.uri is None
        assert not ref.has_uri()
        assert ref.pointer.segments == ("definitions", "Pet")

    def test_external_reference(self) -> None:
        ref = Reference.parse("common.json#/definitions/Error")
        assert ref.uri == "common.json"
        assert ref.has_uri()
        assert ref.pointer.segments == ("definitions", "Error")

    def test_name_is_last_segment(self) -> None:
        assert Reference.parse("#/definitions/Pet").name == "Pet"
        assert Reference.parse("common.json#/responses/NotFound").name == "NotFound"

    def test_str_round_trips(self) -> None:
        for value in ("#/definitions/Pet", "common.json#/definitions/Error"):
            assert str(Reference.parse(value)) == value

    @pytest.mark.parametrize("value", ["pet.json", "pet.json#"])
    def test_whole_document_reference(self, value: str) -> None:
        ref = Reference.parse(value)
        assert ref.uri == "pet.json"
        assert len(ref.pointer) == 0
        assert str(ref) == "pet.json"

    def test_whole_document_name_is_file_stem(self) -> None:
        assert Reference.parse("models/Pet.yaml").name == "Pet"
        assert Reference.parse("https://example.com/schemas/Order.json#").name == "Order"

    @pytest.mark.parametrize("value", ["", "#"])
    def test_empty_local_pointer_rejected(self, value: str) -> None:
        with pytest.raises(SpecParseError, match="pointer is empty"):
            Reference.parse(value)

    def test_frozen(self) -> None:
        ref = Reference.parse("#/definitions/Pet")
        with pytest.raises(ValueError):
            ref.uri = "other.json"  # type: ignore[misc]
