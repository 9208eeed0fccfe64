"""The ``swaggerbind`` command line.

:data:`app` is the root Typer application. :func:`register_commands`
attaches ``init``, ``resolve``, ``bind``, ``inspect`` and ``config``;
:func:`main` is the console-script entry point and turns any
:class:`~swaggerbind.exceptions.SwaggerbindError` that escapes a command
into an error line and that error's exit code.
"""

from __future__ import annotations

import logging
import sys

import typer
from rich.console import Console

from swaggerbind import __version__


app = typer.Typer(
    name="swaggerbind",
    help="Resolve Swagger 2.0 $refs and bind JSON/YAML data to schemas.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"swaggerbind {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit."
    ),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Print results as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print results and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages to stderr."),
) -> None:
    """Set up output for the command that follows.

    The output format comes from ``--json``/``--plain``, else from the
    stored ``output_format``. An unreadable settings file falls back to
    the defaults here; the command itself reports it if it needs settings.
    """
    from swaggerbind.config import load_settings
    from swaggerbind.exceptions import ConfigError
    from swaggerbind.models import Settings
    from swaggerbind.output import OutputFormat, OutputManager, set_output

    try:
        settings = load_settings()
    except ConfigError:
        settings = Settings()

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    elif settings.output_format in {f.value for f in OutputFormat}:
        fmt = OutputFormat(settings.output_format)
    else:
        fmt = OutputFormat.AUTO

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        include_types=settings.include_types,
    )
    set_output(output)
    if verbose:
        _log_to(output.stderr_console)


def _log_to(console: Console) -> None:
    """Route DEBUG records from the ``swaggerbind`` loggers through a RichHandler."""
    from rich.logging import RichHandler

    logger = logging.getLogger("swaggerbind")
    logger.handlers[:] = [h for h in logger.handlers if not isinstance(h, RichHandler)]
    logger.addHandler(RichHandler(console=console, show_path=False, show_time=False))
    logger.setLevel(logging.DEBUG)


def register_commands() -> None:
    """Attach the sub-commands to :data:`app`; repeated calls are no-ops."""
    if getattr(app, "_swaggerbind_registered", False):
        return

    from swaggerbind.commands.bind import bind_app, resolve_command
    from swaggerbind.commands.config import config_app
    from swaggerbind.commands.init import init_command
    from swaggerbind.commands.inspect import inspect_app

    app.command("init")(init_command)
    app.command("resolve")(resolve_command)
    app.add_typer(bind_app, name="bind", help="Bind data to definitions and responses.")
    app.add_typer(inspect_app, name="inspect", help="Inspect document details.")
    app.add_typer(config_app, name="config", help="Show settings and manage profiles.")
    app._swaggerbind_registered = True  # type: ignore[attr-defined]


def main() -> None:
    from swaggerbind.exceptions import SwaggerbindError
    from swaggerbind.output import error

    register_commands()
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except SwaggerbindError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
