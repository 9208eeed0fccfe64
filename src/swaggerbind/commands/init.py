"""``swaggerbind init`` -- save a document and its external documents as a profile.

Every document is loaded and parsed before anything is saved, so a broken
``--relative`` path fails here rather than on the first bind.
"""

from __future__ import annotations

import re
from typing import Optional

import typer

from swaggerbind.commands.common import RELATIVE_OPTION, parse_relative_options
from swaggerbind.exceptions import SwaggerbindError
from swaggerbind.output import debug, error, info, success, suggest


def init_command(
    spec: str = typer.Option(..., "--spec", "-s", help="Swagger document URL or file path."),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Profile name (slug of info.title when omitted)."
    ),
    relative: Optional[list[str]] = RELATIVE_OPTION,
) -> None:
    """Check a Swagger 2.0 document set and save it as the default profile.

    Example::

        swaggerbind init --spec ./petstore.json
        swaggerbind init --spec api.yaml -r common.yaml=./shared/common.yaml
    """
    from swaggerbind.config import load_settings, save_settings
    from swaggerbind.models import Profile
    from swaggerbind.workspace import open_resolver

    try:
        relative_specs = parse_relative_options(relative)
        document = open_resolver(spec, relative_specs).document
    except SwaggerbindError as exc:
        error(f"Invalid document: {exc}")
        raise typer.Exit(code=exc.exit_code) from None

    title = str(document.info.get("title") or "")
    info(f"{title or spec}: {len(document.definitions or {})} definitions")
    for uri, source in relative_specs.items():
        debug(f"{uri} -> {source}")

    profile_name = name or _slug(title)
    settings = load_settings()
    if profile_name in settings.profiles:
        info(f'Replacing profile "{profile_name}".')
    settings.profiles[profile_name] = Profile(spec=spec, relative_specs=relative_specs)
    settings.default_profile = profile_name
    save_settings(settings)

    success(f'Profile "{profile_name}" saved as the default.')
    suggest("Bind data: swaggerbind bind definition <Name> <data.json>")


def _slug(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-") or "default"
