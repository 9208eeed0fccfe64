"""Terminal output: results on stdout, everything else on stderr.

An :class:`OutputManager` is built once per invocation by
:func:`~swaggerbind.app.main_callback` and installed with
:func:`set_output`; commands then call the module-level helpers
(:func:`info`, :func:`error`, :func:`format_bound`, ...).

Results are printed in one of three formats. ``AUTO`` picks ``RICH`` on an
interactive, colour-capable terminal and ``PLAIN`` otherwise. Colour is off
when ``--no-color`` is given, ``NO_COLOR`` is set to anything, or
``TERM=dumb``.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from swaggerbind.bound import BoundContainer, to_plain


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Formats results for stdout and diagnostics for stderr.

    Args:
        format: Result format; ``AUTO`` is resolved at construction.
        no_color: Force colour off.
        quiet: Drop ``info``, ``success`` and ``suggest`` messages.
        verbose: Show ``debug`` messages.
        include_types: Add ``"__type__"`` keys to bound data printed as JSON.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        include_types: bool = True,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._include_types = include_types

        if format is OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format is OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def stderr_console(self) -> Console:
        """Console for diagnostics; the ``--verbose`` log handler writes here too."""
        return self._stderr

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Print a plain value: a document node dump, a summary dict, a list."""
        if self._format is OutputFormat.JSON:
            self.print_data(_to_json(data))
        elif self._format is OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
        elif isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data))

    def format_bound(self, result: Any) -> None:
        """Print the result of :meth:`~swaggerbind.resolver.SchemaResolver.bind`.

        JSON nests the data, tagging each container with ``"__type__"``
        unless ``include_types`` is off. Plain prints one
        ``path<TAB>value`` line per leaf, with ``.`` for the root and
        ``[i]`` for list items. Rich draws a tree labelled with the type
        names.
        """
        if self._format is OutputFormat.JSON:
            self.print_data(_to_json(to_plain(result, include_type=self._include_types)))
        elif self._format is OutputFormat.PLAIN:
            for path, leaf in _leaves(result, ""):
                self.print_data(f"{path or '.'}\t{_plain_scalar(leaf)}")
        else:
            tree = Tree(_node_label("result", result))
            _grow(tree, result)
            self._stdout.print(tree)

    def print_table(
        self, headers: list[str], rows: list[list[str]], title: Optional[str] = None
    ) -> None:
        """Print rows as a Rich table, tab-separated lines, or a JSON list of objects."""
        if self._format is OutputFormat.JSON:
            self.print_data(_to_json([dict(zip(headers, row)) for row in rows]))
            return
        if self._format is OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
            return

        table = Table(*headers, title=title, header_style="bold cyan")
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        self._diagnostic(message)

    def success(self, message: str) -> None:
        self._diagnostic(message, style="green")

    def suggest(self, message: str) -> None:
        self._diagnostic(f"→ {message}", style="dim")

    def warning(self, message: str) -> None:
        self._diagnostic(message, label="Warning:", style="yellow", always=True)

    def error(self, message: str) -> None:
        self._diagnostic(message, label="Error:", style="bold red", always=True)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(message, label="[debug]", style="dim", always=True)

    def _diagnostic(
        self, message: str, label: str = "", style: str = "", always: bool = False
    ) -> None:
        # Messages are printed as Text, never parsed as Rich markup.
        if self._quiet and not always:
            return
        line = f"{label} {message}" if label else message
        if self._no_color:
            print(line, file=sys.stderr, flush=True)
        elif label:
            self._stderr.print(Text.assemble((label, style), " ", message))
        else:
            self._stderr.print(Text(message, style=style))


# ------------------------------------------------------------------ #
# Rendering helpers
# ------------------------------------------------------------------ #


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _plain_lines(data: Any) -> Iterator[str]:
    if isinstance(data, dict):
        for key, value in data.items():
            yield f"{key}\t{value}"
    elif isinstance(data, list):
        for item in data:
            yield "\t".join(map(str, item.values())) if isinstance(item, dict) else str(item)
    else:
        yield str(data)


def _leaves(value: Any, path: str) -> Iterator[tuple[str, Any]]:
    """Walk a bind result depth-first, yielding ``(path, leaf)``."""
    if isinstance(value, BoundContainer):
        children = [(f"{path}.{key}" if path else key, item) for key, item in value.items()]
        empty: Any = {}
    elif isinstance(value, list):
        children = [(f"{path}[{i}]", item) for i, item in enumerate(value)]
        empty = []
    else:
        yield path, value
        return
    if not children:
        yield path, empty
    for child_path, item in children:
        yield from _leaves(item, child_path)


def _plain_scalar(value: Any) -> str:
    if value is None or isinstance(value, (bool, dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def _node_label(name: str, value: Any) -> str:
    head = f"[bold]{escape(name)}[/bold]"
    if isinstance(value, BoundContainer):
        return f"{head} [cyan]{escape(value.type_name or 'object')}[/cyan]"
    if isinstance(value, list):
        return f"{head} [dim]\\[{len(value)}][/dim]"
    return f"{head}: {escape(json.dumps(value, default=str))}"


def _grow(tree: Tree, value: Any) -> None:
    if isinstance(value, BoundContainer):
        children = list(value.items())
    elif isinstance(value, list):
        children = [(f"[{i}]", item) for i, item in enumerate(value)]
    else:
        return
    for name, item in children:
        _grow(tree.add(_node_label(name, item)), item)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; tests call this between CliRunner runs."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def format_bound(result: Any) -> None:
    get_output().format_bound(result)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
