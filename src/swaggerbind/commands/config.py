"""``swaggerbind config`` -- look at the stored settings and manage profiles."""

from __future__ import annotations

import typer

from swaggerbind.config import load_settings, save_settings, settings_path
from swaggerbind.output import error, format_response, get_output, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Print the settings file (defaults when it does not exist yet).

    Example::

        swaggerbind --json config show
    """
    info(f"Settings file: {settings_path()}")
    format_response(load_settings().model_dump(mode="json"))


@config_app.command("profiles")
def config_profiles() -> None:
    """List saved profiles; the default one is marked with ``*``."""
    settings = load_settings()
    if not settings.profiles:
        info("No profiles. Run: swaggerbind init --spec <path>")
        return

    rows = [
        [
            ("* " if name == settings.default_profile else "") + name,
            profile.spec,
            ", ".join(profile.relative_specs) or "-",
        ]
        for name, profile in sorted(settings.profiles.items())
    ]
    get_output().print_table(["Profile", "Spec", "External URIs"], rows, title="Profiles")


@config_app.command("delete")
def config_delete(name: str = typer.Argument(help="Profile to delete.")) -> None:
    """Delete a profile; deleting the default one clears ``default_profile``."""
    settings = load_settings()
    if settings.profiles.pop(name, None) is None:
        error(f"Profile '{name}' not found")
        raise typer.Exit(code=1)
    if settings.default_profile == name:
        settings.default_profile = None
    save_settings(settings)
    success(f'Profile "{name}" deleted.')
