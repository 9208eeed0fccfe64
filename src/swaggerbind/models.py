"""Settings models for swaggerbind.

Everything the CLI remembers between runs is one :class:`Settings` value,
stored as JSON by :mod:`swaggerbind.config`. The Swagger document tree
itself lives in :mod:`swaggerbind.nodes`.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from swaggerbind.resolver import DEFAULT_MAX_DEPTH


class Profile(BaseModel):
    """A saved document set: the main Swagger document and its external ``$ref`` targets.

    ``relative_specs`` is keyed by the URI exactly as the ``$ref`` spells it
    (``"common.yaml"``), and maps to the file path or URL to load.
    """

    spec: str = Field(description="URL or file path of the main document")
    relative_specs: dict[str, str] = Field(default_factory=dict)


class Settings(BaseModel):
    """The contents of ``config.json``."""

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description="Resolver limit for $ref hops and nested property lookups",
    )
    output_format: str = Field(default="auto", description="auto, json, plain or rich")
    include_types: bool = Field(
        default=True, description="Write '__type__' keys when printing bound data as JSON"
    )
    default_profile: Optional[str] = None
    profiles: dict[str, Profile] = Field(default_factory=dict)
