"""Resolve and bind commands -- the CLI face of :class:`~swaggerbind.resolver.SchemaResolver`.

* ``swaggerbind resolve REF`` prints the terminal node a ``$ref`` points to.
* ``swaggerbind bind definition NAME DATA`` binds data to
  ``#/definitions/NAME``.
* ``swaggerbind bind response OPERATION_ID STATUS DATA`` binds a response
  body to the schema the operation declares for that status (or its
  ``default`` response).

``DATA`` is a JSON/YAML file path, a URL, or ``-`` for stdin. Bound
results are rendered with :func:`~swaggerbind.output.format_bound`.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from swaggerbind.commands.common import (
    MAX_DEPTH_OPTION,
    PROFILE_OPTION,
    RELATIVE_OPTION,
    SPEC_OPTION,
    open_active_resolver,
)
from swaggerbind.exceptions import SwaggerbindError
from swaggerbind.output import debug, error, format_bound, format_response


bind_app = typer.Typer(no_args_is_help=True)


def _load_payload(source: str) -> Any:
    """Load the data to bind, exiting with the error's code on failure."""
    from swaggerbind.parser import load_data

    try:
        return load_data(source)
    except SwaggerbindError as exc:
        error(f"Failed to load data: {exc}")
        raise typer.Exit(code=exc.exit_code) from None


def resolve_command(
    ref: str = typer.Argument(
        help="Reference to resolve, e.g. '#/definitions/Pet' or 'common.yaml#/definitions/Error'."
    ),
    profile: Optional[str] = PROFILE_OPTION,
    spec: Optional[str] = SPEC_OPTION,
    relative: Optional[list[str]] = RELATIVE_OPTION,
    max_depth: Optional[int] = MAX_DEPTH_OPTION,
) -> None:
    """Resolve a $ref to its terminal node and print it.

    Reference chains are followed to the end, crossing into registered
    external documents where needed.

    Example::

        swaggerbind resolve '#/definitions/Pet' --spec petstore.json
        swaggerbind resolve 'common.json#/definitions/Error' -r common.json=./common.json
    """
    from swaggerbind.nodes import Schema
    from swaggerbind.pointer import Reference

    resolver = open_active_resolver(profile, spec, relative, max_depth)
    try:
        node = resolver.resolve(Schema(ref=Reference.parse(ref)))
    except SwaggerbindError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Resolved {ref} to {type(node).__name__}")
    format_response(node.model_dump(mode="json", by_alias=True, exclude_none=True))


@bind_app.command("definition")
def bind_definition(
    name: str = typer.Argument(help="Definition name, e.g. 'Pet'."),
    data: str = typer.Argument("-", help="Data file, URL, or '-' for stdin."),
    profile: Optional[str] = PROFILE_OPTION,
    spec: Optional[str] = SPEC_OPTION,
    relative: Optional[list[str]] = RELATIVE_OPTION,
    max_depth: Optional[int] = MAX_DEPTH_OPTION,
) -> None:
    """Bind data to a named definition.

    The data is bound as if through ``{"$ref": "#/definitions/NAME"}``,
    so the result is named after the definition.

    Example::

        swaggerbind bind definition Pet pet.json --spec petstore.json
        cat pets.json | swaggerbind --json bind definition PetList
    """
    from swaggerbind.nodes import Schema
    from swaggerbind.pointer import JsonPointer, Reference

    resolver = open_active_resolver(profile, spec, relative, max_depth)
    payload = _load_payload(data)
    ref = Reference(pointer=JsonPointer(segments=("definitions", name)))
    try:
        result = resolver.bind(Schema(ref=ref), payload)
    except SwaggerbindError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_bound(result)


@bind_app.command("response")
def bind_response(
    operation_id: str = typer.Argument(help="The operation's operationId."),
    status: str = typer.Argument(help="HTTP status code, e.g. '200'."),
    data: str = typer.Argument("-", help="Data file, URL, or '-' for stdin."),
    profile: Optional[str] = PROFILE_OPTION,
    spec: Optional[str] = SPEC_OPTION,
    relative: Optional[list[str]] = RELATIVE_OPTION,
    max_depth: Optional[int] = MAX_DEPTH_OPTION,
) -> None:
    """Bind a response body to an operation's response schema.

    Uses the response declared for STATUS, falling back to the operation's
    ``default`` response.

    Example::

        swaggerbind bind response getPetById 200 pet.json
        swaggerbind bind response getPetById 404 error.json
    """
    resolver = open_active_resolver(profile, spec, relative, max_depth)
    payload = _load_payload(data)
    try:
        operation = resolver.document.find_operation(operation_id)
        result = resolver.bind_operation_response(operation, status, payload)
    except SwaggerbindError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_bound(result)
