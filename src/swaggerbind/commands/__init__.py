"""Built-in CLI sub-commands for swaggerbind.

This package groups all Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~swaggerbind.commands.init` -- create a profile for a document.
* :mod:`~swaggerbind.commands.config` -- view and modify global settings.
* :mod:`~swaggerbind.commands.inspect` -- list definitions and operations.
* :mod:`~swaggerbind.commands.bind` -- ``resolve`` a reference and
  ``bind`` data to definitions or operation responses.

:mod:`~swaggerbind.commands.common` holds the options and resolver
loading shared by every document-consuming command.
"""
