"""Persistent settings: one JSON file holding defaults and saved profiles.

The file lives at ``$XDG_CONFIG_HOME/swaggerbind/config.json``, or
``~/.config/swaggerbind/config.json`` when the variable is unset.

Two lookups combine the stored :class:`~swaggerbind.models.Settings` with
the command line and the environment:

* :func:`select_profile` -- ``--profile``, then ``SWAGGERBIND_PROFILE``,
  then ``default_profile``.
* :func:`resolve_max_depth` -- ``--max-depth``, then
  ``SWAGGERBIND_MAX_DEPTH``, then the stored ``max_depth``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from swaggerbind.exceptions import ConfigError
from swaggerbind.models import Profile, Settings

logger = logging.getLogger(__name__)

ENV_PROFILE = "SWAGGERBIND_PROFILE"
ENV_MAX_DEPTH = "SWAGGERBIND_MAX_DEPTH"


def settings_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "swaggerbind" / "config.json"


def load_settings() -> Settings:
    """Read the settings file; a missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
    """
    path = settings_path()
    if not path.is_file():
        return Settings()
    try:
        return Settings.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings file {path}: {exc}") from exc


def save_settings(settings: Settings) -> Path:
    """Write *settings* and return the file path.

    The JSON goes to a sibling temp file first and is moved into place with
    :func:`os.replace`, so readers never see a half-written file.
    """
    path = settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    staging = path.with_name(f".{path.name}.tmp")
    staging.write_text(settings.model_dump_json(indent=2) + "\n", encoding="utf-8")
    os.replace(staging, path)
    logger.debug("Saved settings to %s", path)
    return path


def select_profile(
    settings: Settings, name: Optional[str] = None
) -> Optional[tuple[str, Profile]]:
    """Pick the active profile.

    Returns:
        ``(name, profile)``, or ``None`` when no profile is named anywhere.

    Raises:
        ConfigError: If the chosen name is not a saved profile.
    """
    chosen = name or os.environ.get(ENV_PROFILE) or settings.default_profile
    if chosen is None:
        return None
    if chosen not in settings.profiles:
        raise ConfigError(f"Profile '{chosen}' not found")
    return chosen, settings.profiles[chosen]


def resolve_max_depth(settings: Settings, cli_max_depth: Optional[int] = None) -> int:
    """Return the depth limit handed to :class:`~swaggerbind.resolver.SchemaResolver`.

    Raises:
        ConfigError: If the CLI or environment value is not a positive
            integer.
    """
    if cli_max_depth is not None:
        source, raw = "--max-depth", str(cli_max_depth)
    elif os.environ.get(ENV_MAX_DEPTH):
        source, raw = ENV_MAX_DEPTH, os.environ[ENV_MAX_DEPTH]
    else:
        return settings.max_depth

    try:
        depth = int(raw)
    except ValueError:
        raise ConfigError(f"{source} must be an integer, got: {raw}") from None
    if depth < 1:
        raise ConfigError(f"{source} must be at least 1, got: {depth}")
    return depth
