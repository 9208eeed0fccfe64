"""Fixtures shared across the swaggerbind test suite.

* ``petstore_*`` / ``common_*`` -- the two fixture documents as raw dicts,
  parsed :class:`~swaggerbind.nodes.Document` trees, and resolvers.
  ``common.json`` holds shared definitions that ``petstore_2.0.json``
  references by URI.
* ``isolated_config`` / ``fixture_files`` -- a throwaway settings file and
  working directory.
* ``quiet_output`` / ``json_output`` / ``cli_runner`` -- output and CLI
  helpers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from swaggerbind.nodes import Document
from swaggerbind.output import OutputFormat, OutputManager, reset_output, set_output
from swaggerbind.resolver import SchemaResolver


FIXTURES_DIR = Path(__file__).parent / "fixtures"
DOCUMENTS = {"petstore": "petstore_2.0.json", "common": "common.json"}


@pytest.fixture(autouse=True)
def _fresh_output() -> None:
    """Drop the global OutputManager after each test.

    It holds the sys.stdout/sys.stderr objects that existed when it was
    built, which CliRunner closes once an invocation finishes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Documents and resolvers
# ---------------------------------------------------------------------------


def _read_fixture(key: str) -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / DOCUMENTS[key]).read_text(encoding="utf-8"))


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    return _read_fixture("petstore")


@pytest.fixture
def common_raw() -> dict[str, Any]:
    """The shared-definitions fragment; it has no ``swagger`` key."""
    return _read_fixture("common")


@pytest.fixture
def petstore_doc(petstore_raw: dict[str, Any]) -> Document:
    return Document.model_validate(petstore_raw)


@pytest.fixture
def common_doc(common_raw: dict[str, Any]) -> Document:
    return Document.model_validate(common_raw)


@pytest.fixture
def common_resolver(common_doc: Document) -> SchemaResolver:
    return SchemaResolver(common_doc)


@pytest.fixture
def resolver(petstore_doc: Document, common_resolver: SchemaResolver) -> SchemaResolver:
    """Petstore resolver with ``common.json`` registered as a sub-resolver."""
    return SchemaResolver(petstore_doc, {"common.json": common_resolver})


# ---------------------------------------------------------------------------
# Settings and files on disk
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME into *tmp_path*, clear SWAGGERBIND_* and cd there."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("SWAGGERBIND_PROFILE", raising=False)
    monkeypatch.delenv("SWAGGERBIND_MAX_DEPTH", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fixture_files(isolated_config: Path) -> dict[str, Path]:
    """Both fixture documents copied into the isolated working directory."""
    paths = {}
    for key, filename in DOCUMENTS.items():
        paths[key] = isolated_config / filename
        paths[key].write_text((FIXTURES_DIR / filename).read_text(encoding="utf-8"))
    return paths


# ---------------------------------------------------------------------------
# Output and CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    return output


@pytest.fixture
def json_output() -> OutputManager:
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    return output


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
