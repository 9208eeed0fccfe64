"""Options and resolver loading shared by the document-consuming commands.

Commands that load a document take ``--profile`` and ``--spec``; the
resolve and bind commands add ``--relative URI=PATH`` (repeatable) and
``--max-depth``. An explicit ``--spec`` wins over any profile; otherwise
the profile comes from :func:`~swaggerbind.config.select_profile`.
"""

from __future__ import annotations

from typing import Optional

import typer

from swaggerbind.exceptions import InvalidUsageError, SwaggerbindError
from swaggerbind.output import debug, error, suggest
from swaggerbind.resolver import SchemaResolver

PROFILE_OPTION = typer.Option(None, "--profile", "-p", help="Profile name.")
SPEC_OPTION = typer.Option(
    None, "--spec", "-s", help="Swagger document URL or file path (overrides the profile)."
)
RELATIVE_OPTION = typer.Option(
    None,
    "--relative",
    "-r",
    help="External document for a $ref URI, as URI=PATH. Repeatable.",
)
MAX_DEPTH_OPTION = typer.Option(
    None, "--max-depth", help="Maximum $ref chain length before giving up."
)


def parse_relative_options(values: Optional[list[str]]) -> dict[str, str]:
    """Turn ``["common.yaml=./shared/common.yaml", ...]`` into a URI -> path dict.

    The split is on the last ``=``, so URIs with query strings still work.

    Raises:
        InvalidUsageError: If a value has no ``=`` or an empty side.
    """
    result: dict[str, str] = {}
    for value in values or []:
        uri, sep, path = value.rpartition("=")
        if not sep or not uri or not path:
            raise InvalidUsageError(
                f"Invalid --relative value '{value}': expected URI=PATH"
            )
        result[uri] = path
    return result


def open_active_resolver(
    profile_name: Optional[str] = None,
    spec: Optional[str] = None,
    relative: Optional[list[str]] = None,
    max_depth: Optional[int] = None,
) -> SchemaResolver:
    """Build the resolver for the current command.

    ``--relative`` entries are added on top of the profile's
    ``relative_specs`` (and replace entries with the same URI).

    Raises:
        typer.Exit: With the error's exit code when no document is
            configured or loading fails.
    """
    from swaggerbind.config import load_settings, resolve_max_depth, select_profile
    from swaggerbind.workspace import open_resolver

    try:
        relative_specs = parse_relative_options(relative)
        settings = load_settings()
        depth = resolve_max_depth(settings, max_depth)
        if spec is not None:
            debug(f"Loading document from --spec: {spec}")
            return open_resolver(spec, relative_specs, max_depth=depth)

        selected = select_profile(settings, profile_name)
        if selected is None:
            error("No active profile and no --spec given.")
            suggest("Run: swaggerbind init --spec <path>")
            raise typer.Exit(code=2)

        name, profile = selected
        debug(f"Loading document from profile '{name}': {profile.spec}")
        return open_resolver(
            profile.spec,
            {**profile.relative_specs, **relative_specs},
            max_depth=depth,
        )
    except SwaggerbindError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
