"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~swaggerbind.exceptions.SwaggerbindError` subclass.
Shell wrappers and CI scripts can inspect the exit code to tell a broken
document apart from data that does not fit the document.

Example::

    $ swaggerbind bind definition Pet pet.json
    $ echo $?
    9   # EXIT_BINDING_ERROR -- the data has a key the schema does not define
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The Swagger document could not be loaded, parsed, or validated."""

EXIT_RESOLUTION_ERROR = 8
"""A ``$ref`` or pointer could not be resolved against the document."""

EXIT_BINDING_ERROR = 9
"""The input data could not be bound to the resolved schema."""
