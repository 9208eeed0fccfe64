"""Tests for swaggerbind.workspace.open_resolver."""

from __future__ import annotations

from pathlib import Path

import pytest

from swaggerbind.exceptions import SpecParseError
from swaggerbind.nodes import Schema
from swaggerbind.registry import SubResolver
from swaggerbind.workspace import open_resolver


class TestOpenResolver:
    def test_main_document_only(self, fixture_files: dict[str, Path]) -> None:
        resolver = open_resolver(str(fixture_files["petstore"]))
        assert resolver.document.info["title"] == "Petstore API"
        assert len(resolver.relative_resolvers) == 0

    def test_registers_external_documents(self, fixture_files: dict[str, Path]) -> None:
        resolver = open_resolver(
            str(fixture_files["petstore"]),
            {"common.json": str(fixture_files["common"])},
            max_depth=10,
        )
        entry = resolver.relative_resolvers["common.json"]
        assert isinstance(entry, SubResolver)
        assert entry.resolver.max_depth == 10
        assert resolver.max_depth == 10

        error = resolver.bind(Schema.model_validate({"$ref": "#/definitions/RemoteError"}), {"code": 1})
        assert error.type_name == "Error"

    def test_main_document_needs_swagger_version(self, fixture_files: dict[str, Path]) -> None:
        with pytest.raises(SpecParseError, match="Missing 'swagger'"):
            open_resolver(str(fixture_files["common"]))

    def test_missing_external_file(self, fixture_files: dict[str, Path]) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            open_resolver(str(fixture_files["petstore"]), {"common.json": "./nope.json"})
