"""Read Swagger documents and instance data as plain Python values.

A *source* is ``-`` (stdin), an ``http(s)://`` URL, or a local path. The
text is decoded as JSON or YAML; a file suffix or a response
``Content-Type`` narrows the choice, and without one JSON is tried before
YAML. Documents from :func:`load_spec` go on to
:func:`~swaggerbind.parser.document.parse_document`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from swaggerbind.exceptions import SpecParseError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0

_SUFFIX_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load a document from *source*; the top level must be a mapping.

    Raises:
        SpecParseError: On read or decode failure, or a non-mapping document.
    """
    logger.debug("Loading document from %s", source)
    document = _load(source)
    if isinstance(document, dict):
        return document
    kind = "empty document" if document is None else type(document).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")


def load_data(source: str) -> Any:
    """Load instance data from *source*. Arrays and scalars are allowed."""
    logger.debug("Loading data from %s", source)
    return _load(source)


def _load(source: str) -> Any:
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> Any:
    try:
        text = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Could not read stdin: {exc}") from exc
    if not text.strip():
        raise SpecParseError("No input received from stdin")
    return _parse_content(text)


def _load_from_url(url: str) -> Any:
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise SpecParseError(f"HTTP {status} from {url}") from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "").lower()
    hint = ""
    for fmt in ("json", "yaml", "yml"):
        if fmt in content_type:
            hint = "yaml" if fmt == "yml" else fmt
            break
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> Any:
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"File not found: {path}")
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Could not read {path}: {exc}") from exc
    if not text.strip():
        raise SpecParseError(f"File is empty: {path}")
    return _parse_content(text, hint=_SUFFIX_FORMATS.get(file_path.suffix.lower(), ""))


def _parse_content(content: str, hint: str = "") -> Any:
    """Decode *content*; *hint* is ``"json"``, ``"yaml"`` or empty.

    A ``"json"`` hint makes JSON errors final. Otherwise a JSON failure
    falls through to YAML, and if both fail the error names each.
    """
    problems = []
    if hint != "yaml":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            problems.append(f"JSON error: {exc}")
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        problems.append(f"YAML error: {exc}")
    raise SpecParseError(
        "\n  ".join(["Failed to parse content as JSON or YAML", *problems])
    )


def validate_swagger_version(spec: dict[str, Any]) -> str:
    """Return ``"2.0"`` for a Swagger 2.0 document.

    OpenAPI 3 moved schemas from ``definitions`` to ``components``, so an
    ``openapi`` key is rejected outright.

    Raises:
        SpecParseError: If the ``swagger`` field is missing or not 2.0.
    """
    if "openapi" in spec:
        raise SpecParseError(
            f"OpenAPI {spec['openapi']} is not supported; expected a Swagger 2.0 document"
        )
    if "swagger" not in spec:
        raise SpecParseError("Missing 'swagger' field. Is this a Swagger 2.0 document?")
    version = str(spec["swagger"])
    if version not in ("2", "2.0"):
        raise SpecParseError(f"Unsupported Swagger version: {version}")
    return "2.0"
