"""Inspect commands -- examine the contents of a Swagger document.

Provides the ``swaggerbind inspect`` sub-command group with read-only
commands for the document's metadata, its ``definitions``, and its
operations. Each command loads the document the same way the bind
commands do (profile or ``--spec``).
"""

from __future__ import annotations

from typing import Optional

import typer

from swaggerbind.commands.common import (
    PROFILE_OPTION,
    SPEC_OPTION,
    open_active_resolver,
)
from swaggerbind.output import format_response, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


@inspect_app.command("info")
def inspect_info(
    profile: Optional[str] = PROFILE_OPTION,
    spec: Optional[str] = SPEC_OPTION,
) -> None:
    """Show document info (title, version, section sizes).

    Example::

        swaggerbind inspect info --spec petstore.json
    """
    document = open_active_resolver(profile, spec).document

    data: dict = {
        "title": document.info.get("title", "-"),
        "version": document.info.get("version", "-"),
        "swagger": document.swagger,
        "host": document.host or "-",
        "basePath": document.base_path or "-",
        "paths": len(document.paths or {}),
        "operations": sum(1 for _ in document.iter_operations()),
        "definitions": len(document.definitions or {}),
        "parameters": len(document.parameters or {}),
        "responses": len(document.responses or {}),
        "securityDefinitions": list((document.security_definitions or {}).keys()),
    }
    format_response(data)


@inspect_app.command("definitions")
def inspect_definitions(
    profile: Optional[str] = PROFILE_OPTION,
    spec: Optional[str] = SPEC_OPTION,
) -> None:
    """List all definitions with their type, properties, and allOf members.

    Example::

        swaggerbind inspect definitions
    """
    document = open_active_resolver(profile, spec).document

    if not document.definitions:
        info("No definitions in this document.")
        return

    headers = ["Definition", "Type", "Properties", "allOf"]
    rows: list[list[str]] = []
    for name, schema in sorted(document.definitions.items()):
        prop_names = list((schema.properties or {}).keys())
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        composed = ", ".join(
            member.ref.name if member.ref is not None else "(inline)"
            for member in schema.all_of or []
        )
        rows.append([
            name,
            schema.type or ("$ref" if schema.has_ref() else "-"),
            props or "-",
            composed or "-",
        ])

    get_output().print_table(headers, rows, title=f"Definitions ({len(rows)})")


@inspect_app.command("operations")
def inspect_operations(
    profile: Optional[str] = PROFILE_OPTION,
    spec: Optional[str] = SPEC_OPTION,
) -> None:
    """List all operations with their operationId and declared status codes.

    Example::

        swaggerbind inspect operations
    """
    document = open_active_resolver(profile, spec).document

    headers = ["Method", "Path", "Operation ID", "Responses"]
    rows: list[list[str]] = []
    for path, method, operation in sorted(
        document.iter_operations(), key=lambda entry: (entry[0], entry[1])
    ):
        codes = list(operation.responses.codes) if operation.responses else []
        if operation.responses is not None and operation.responses.default is not None:
            codes.append("default")
        rows.append([
            method.upper(),
            path,
            operation.operation_id or "-",
            ", ".join(codes) or "-",
        ])

    get_output().print_table(headers, rows, title=f"Operations ({len(rows)})")
