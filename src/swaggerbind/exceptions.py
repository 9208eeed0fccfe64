"""Exception hierarchy for swaggerbind.

All exceptions inherit from :class:`SwaggerbindError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`swaggerbind.exit_codes`. The top-level error handler in
:func:`swaggerbind.app.main` catches ``SwaggerbindError`` and exits with the
appropriate code. Errors without a more specific category, such as
:class:`ConfigError`, use :data:`EXIT_GENERIC_FAILURE`.

Resolution and binding errors keep their diagnostic values (property name,
URI, operation id, ...) as attributes so that callers can inspect them
without parsing the message.

Subclass hierarchy::

    SwaggerbindError (exit 1)
    +-- InvalidUsageError                    (exit 2)
    +-- SpecParseError                       (exit 7)
    +-- ResolutionError                      (exit 8)
    |   +-- MissingDocumentPropertyError
    |   +-- UnsupportedPointerSegmentError
    |   +-- RelativeResolverUnavailableError
    |   +-- InvalidResolverRegistrationError
    |   +-- ReferenceDepthExceededError
    +-- BindingError                         (exit 9)
    |   +-- UndefinedPropertySchemaError
    |   +-- UndefinedOperationResponseSchemaError
    |   +-- DataShapeMismatchError
    +-- ConfigError                          (exit 1)
"""

from __future__ import annotations

from typing import Any, Optional

from swaggerbind.exit_codes import (
    EXIT_BINDING_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_RESOLUTION_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SwaggerbindError(Exception):
    """Base exception for all swaggerbind errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`swaggerbind.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SwaggerbindError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SwaggerbindError):
    """Raised when the Swagger document cannot be loaded, parsed, or validated."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(SwaggerbindError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE


# --- Resolution ---


class ResolutionError(SwaggerbindError):
    """Base class for failures while following references and pointers."""

    exit_code = EXIT_RESOLUTION_ERROR


class MissingDocumentPropertyError(ResolutionError):
    """Raised by a document accessor when the requested property is not defined.

    This is the "not present" signal of the node model. It is deliberately
    distinct from every other failure: property resolution catches it while
    probing ``allOf`` members, and binding turns it into
    :class:`UndefinedPropertySchemaError`.

    Args:
        property_name: The property, key, or section that is absent.
        owner: Optional description of the node or section that was asked.
    """

    def __init__(self, property_name: str, owner: Optional[str] = None):
        self.property_name = property_name
        self.owner = owner
        where = f" in {owner}" if owner else ""
        super().__init__(f"Document property '{property_name}' is not defined{where}")


class UnsupportedPointerSegmentError(ResolutionError):
    """Raised when a pointer segment names no known document section.

    Also raised when a pointer is too short (``segment`` is ``None``) or
    longer than the ``section/key`` form the resolver understands.
    """

    def __init__(self, segment: Optional[str], pointer: Optional[str] = None):
        self.segment = segment
        self.pointer = pointer
        if segment is None:
            msg = f"Pointer '{pointer}' is missing a required segment"
        else:
            msg = f"The pointer segment '{segment}' is not supported"
            if pointer is not None:
                msg += f" (in '{pointer}')"
        super().__init__(msg)


class RelativeResolverUnavailableError(ResolutionError):
    """Raised when an external ``$ref`` names a URI with no registered resolver."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"No relative resolver is registered for '{uri}'")


class InvalidResolverRegistrationError(ResolutionError):
    """Raised when a registry value is neither a resolved node nor a resolver."""

    def __init__(self, uri: str, value: Any = None):
        self.uri = uri
        self.value = value
        super().__init__(
            f"Relative resolver for '{uri}' must be a SchemaResolver or a "
            f"resolved node, got {type(value).__name__}"
        )


class ReferenceDepthExceededError(ResolutionError):
    """Raised when a reference chain or composition nesting exceeds the depth limit.

    Converts cyclic ``$ref`` chains (``A -> B -> A``) and self-composing
    ``allOf`` schemas into a reported error instead of a ``RecursionError``.
    """

    def __init__(self, limit: int, reference: Optional[str] = None):
        self.limit = limit
        self.reference = reference
        msg = f"Resolution exceeded the maximum depth of {limit}"
        if reference is not None:
            msg += f" while following '{reference}'"
        super().__init__(msg + "; the document may contain a reference cycle")


# --- Binding ---


class BindingError(SwaggerbindError):
    """Base class for failures while binding data to a schema."""

    exit_code = EXIT_BINDING_ERROR


class UndefinedPropertySchemaError(BindingError):
    """Raised when no schema is found for a key present in the input data."""

    def __init__(self, property_name: str, schema: Any = None):
        self.property_name = property_name
        self.schema = schema
        super().__init__(f"No schema is defined for property '{property_name}'")


class UndefinedOperationResponseSchemaError(BindingError):
    """Raised when an operation has no response schema for a status code."""

    def __init__(self, operation_id: Optional[str], status_code: str):
        self.operation_id = operation_id
        self.status_code = status_code
        super().__init__(
            f"Operation '{operation_id}' defines no response schema for "
            f"status {status_code}"
        )


class DataShapeMismatchError(BindingError):
    """Raised when the data's shape does not match the schema (e.g. a list for an object)."""

    def __init__(self, expected: str, actual: Any):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} data, got {type(actual).__name__}"
        )
