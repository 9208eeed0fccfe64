"""Tests for swaggerbind.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from swaggerbind.exceptions import SpecParseError
from swaggerbind.parser.loader import (
    _load_from_file,
    _load_from_stdin,
    _load_from_url,
    _parse_content,
    load_data,
    load_spec,
    validate_swagger_version,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# load_spec / load_data dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """load_spec routes to the right loader and requires an object."""

    def test_loads_fixture(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore_2.0.json"))
        assert result["swagger"] == "2.0"
        assert result["info"]["title"] == "Petstore API"

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "api.yaml"
        yaml_file.write_text(textwrap.dedent("""\
            swagger: "2.0"
            info:
              title: YAML Test
              version: "1.0.0"
            definitions:
              Pet:
                type: object
        """), encoding="utf-8")
        result = load_spec(str(yaml_file))
        assert result["definitions"]["Pet"]["type"] == "object"

    def test_loads_from_stdin(self) -> None:
        body = json.dumps({"swagger": "2.0", "info": {"title": "stdin", "version": "1"}})
        with patch("swaggerbind.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(body)
            result = load_spec("-")
        assert result["info"]["title"] == "stdin"

    def test_loads_from_url(self) -> None:
        spec = {"swagger": "2.0", "info": {"title": "URL test", "version": "1.0"}}
        mock_response = httpx.Response(
            status_code=200,
            json=spec,
            request=httpx.Request("GET", "https://example.com/swagger.json"),
        )
        with patch("swaggerbind.parser.loader.httpx.get", return_value=mock_response):
            result = load_spec("https://example.com/swagger.json")
        assert result["info"]["title"] == "URL test"

    def test_non_object_rejected(self, tmp_path: Path) -> None:
        array_file = tmp_path / "array.json"
        array_file.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            load_spec(str(array_file))

    def test_null_yaml_rejected(self, tmp_path: Path) -> None:
        null_file = tmp_path / "null.yaml"
        null_file.write_text("---\n", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty document"):
            load_spec(str(null_file))


class TestLoadData:
    """load_data accepts any JSON/YAML value."""

    def test_object(self, tmp_path: Path) -> None:
        data_file = tmp_path / "pet.json"
        data_file.write_text('{"name": "Rex"}', encoding="utf-8")
        assert load_data(str(data_file)) == {"name": "Rex"}

    def test_array(self, tmp_path: Path) -> None:
        data_file = tmp_path / "pets.json"
        data_file.write_text('[{"name": "Rex"}, {"name": "Tom"}]', encoding="utf-8")
        assert load_data(str(data_file)) == [{"name": "Rex"}, {"name": "Tom"}]

    def test_scalar(self, tmp_path: Path) -> None:
        data_file = tmp_path / "count.json"
        data_file.write_text("42", encoding="utf-8")
        assert load_data(str(data_file)) == 42

    def test_missing_file(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            load_data("/nonexistent/data.json")


# ---------------------------------------------------------------------------
# _load_from_file
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    """Loading from local files."""

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            _load_from_file("/nonexistent/path/to/swagger.json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            _load_from_file(str(empty))

    def test_invalid_json_file_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{invalid json", encoding="utf-8")
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _load_from_file(str(bad))

    def test_unknown_extension_detects_yaml(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "swagger.txt"
        spec_file.write_text("swagger: '2.0'\npaths: {}\n", encoding="utf-8")
        assert _load_from_file(str(spec_file)) == {"swagger": "2.0", "paths": {}}


# ---------------------------------------------------------------------------
# _load_from_stdin
# ---------------------------------------------------------------------------


class TestLoadFromStdin:
    """Loading from stdin."""

    def test_reads_yaml_from_stdin(self) -> None:
        with patch("swaggerbind.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("name: Rex\ntags:\n  - good\n")
            result = _load_from_stdin()
        assert result == {"name": "Rex", "tags": ["good"]}

    def test_empty_stdin_raises(self) -> None:
        with patch("swaggerbind.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   \n\t\n  ")
            with pytest.raises(SpecParseError, match="No input"):
                _load_from_stdin()


# ---------------------------------------------------------------------------
# _load_from_url
# ---------------------------------------------------------------------------


class TestLoadFromUrl:
    """Loading from URLs."""

    def test_loads_yaml_from_url(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            text="swagger: '2.0'\ninfo:\n  title: YAML Remote\n",
            headers={"content-type": "application/x-yaml"},
            request=httpx.Request("GET", "https://example.com/swagger.yaml"),
        )
        with patch("swaggerbind.parser.loader.httpx.get", return_value=mock_response):
            result = _load_from_url("https://example.com/swagger.yaml")
        assert result["info"]["title"] == "YAML Remote"

    def test_http_error_raises(self) -> None:
        mock_response = httpx.Response(
            status_code=404,
            request=httpx.Request("GET", "https://example.com/missing.json"),
        )
        with patch("swaggerbind.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(SpecParseError, match="HTTP 404"):
                _load_from_url("https://example.com/missing.json")

    def test_connection_error_raises(self) -> None:
        with patch(
            "swaggerbind.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("Connection refused"),
        ):
            with pytest.raises(SpecParseError, match="Failed to fetch"):
                _load_from_url("https://unreachable.example.com/swagger.json")


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    """Content parsing with format detection."""

    def test_parses_json(self) -> None:
        assert _parse_content('{"key": "value"}') == {"key": "value"}

    def test_parses_yaml(self) -> None:
        assert _parse_content("key: value\nnested:\n  a: 1") == {"key": "value", "nested": {"a": 1}}

    def test_json_hint_forces_json_only(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _parse_content("not: valid: json: {{{", hint="json")

    def test_invalid_content_raises(self) -> None:
        with pytest.raises(SpecParseError, match="Failed to parse"):
            _parse_content("}{not valid at all][", hint="")

    def test_scalar_content(self) -> None:
        assert _parse_content('"just a string"') == "just a string"


# ---------------------------------------------------------------------------
# validate_swagger_version
# ---------------------------------------------------------------------------


class TestValidateSwaggerVersion:
    """Only Swagger 2.0 is accepted."""

    def test_accepts_2_0(self) -> None:
        assert validate_swagger_version({"swagger": "2.0"}) == "2.0"

    def test_accepts_numeric_version(self) -> None:
        assert validate_swagger_version({"swagger": 2.0}) == "2.0"

    def test_rejects_openapi_3(self) -> None:
        with pytest.raises(SpecParseError, match="OpenAPI 3.0.3 is not supported"):
            validate_swagger_version({"openapi": "3.0.3"})

    def test_rejects_missing_field(self) -> None:
        with pytest.raises(SpecParseError, match="Missing 'swagger' field"):
            validate_swagger_version({"info": {"title": "test"}})

    def test_rejects_other_version(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported Swagger version: 1.2"):
            validate_swagger_version({"swagger": "1.2"})
