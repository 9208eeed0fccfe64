"""Tests for swaggerbind.config -- the settings file, profile selection, depth limit."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swaggerbind.config import (
    load_settings,
    resolve_max_depth,
    save_settings,
    select_profile,
    settings_path,
)
from swaggerbind.exceptions import ConfigError
from swaggerbind.models import Profile, Settings


def _settings_with(*names: str, default: str | None = None) -> Settings:
    return Settings(
        default_profile=default,
        profiles={name: Profile(spec=f"./{name}.json") for name in names},
    )


# ---------------------------------------------------------------------------
# Settings file
# ---------------------------------------------------------------------------


class TestSettingsFile:
    """Location, defaults, and round-tripping of config.json."""

    def test_path_under_xdg_config_home(self, isolated_config: Path) -> None:
        assert settings_path() == isolated_config / "config" / "swaggerbind" / "config.json"

    def test_path_default_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert settings_path() == tmp_path / ".config" / "swaggerbind" / "config.json"

    def test_missing_file_gives_defaults(self, isolated_config: Path) -> None:
        settings = load_settings()
        assert settings == Settings()
        assert settings.max_depth == 64
        assert settings.include_types is True
        assert not settings_path().exists()

    def test_save_then_load(self, isolated_config: Path) -> None:
        settings = Settings(
            max_depth=12,
            output_format="json",
            default_profile="pets",
            profiles={"pets": Profile(spec="api.yaml", relative_specs={"common.yaml": "./c.yaml"})},
        )
        path = save_settings(settings)

        assert path == settings_path()
        assert load_settings() == settings
        assert json.loads(path.read_text())["profiles"]["pets"]["spec"] == "api.yaml"

    def test_save_leaves_no_staging_file(self, isolated_config: Path) -> None:
        save_settings(Settings())
        save_settings(Settings(max_depth=3))
        assert [p.name for p in settings_path().parent.iterdir()] == ["config.json"]

    @pytest.mark.parametrize("content", ["{nope", '{"max_depth": 0}', '{"profiles": {"x": {}}}'])
    def test_invalid_file(self, isolated_config: Path, content: str) -> None:
        settings_path().parent.mkdir(parents=True)
        settings_path().write_text(content)
        with pytest.raises(ConfigError, match="Invalid settings file"):
            load_settings()


# ---------------------------------------------------------------------------
# Profile selection
# ---------------------------------------------------------------------------


class TestSelectProfile:
    """--profile, then SWAGGERBIND_PROFILE, then default_profile."""

    def test_nothing_selected(self, isolated_config: Path) -> None:
        assert select_profile(_settings_with("pets")) is None

    def test_default_profile(self, isolated_config: Path) -> None:
        name, profile = select_profile(_settings_with("pets", "shop", default="shop"))
        assert name == "shop"
        assert profile.spec == "./shop.json"

    def test_env_beats_default(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SWAGGERBIND_PROFILE", "pets")
        name, _ = select_profile(_settings_with("pets", "shop", default="shop"))
        assert name == "pets"

    def test_argument_beats_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SWAGGERBIND_PROFILE", "pets")
        name, _ = select_profile(_settings_with("pets", "shop"), "shop")
        assert name == "shop"

    def test_unknown_profile(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="'ghost' not found"):
            select_profile(_settings_with("pets"), "ghost")


# ---------------------------------------------------------------------------
# Depth limit
# ---------------------------------------------------------------------------


class TestResolveMaxDepth:
    """--max-depth, then SWAGGERBIND_MAX_DEPTH, then the stored max_depth."""

    def test_stored_value(self, isolated_config: Path) -> None:
        assert resolve_max_depth(Settings()) == 64
        assert resolve_max_depth(Settings(max_depth=10)) == 10

    def test_env_beats_stored(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SWAGGERBIND_MAX_DEPTH", "20")
        assert resolve_max_depth(Settings(max_depth=10)) == 20

    def test_cli_beats_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SWAGGERBIND_MAX_DEPTH", "20")
        assert resolve_max_depth(Settings(), 3) == 3

    @pytest.mark.parametrize("value", ["deep", "0", "-4"])
    def test_invalid_env_value(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("SWAGGERBIND_MAX_DEPTH", value)
        with pytest.raises(ConfigError, match="SWAGGERBIND_MAX_DEPTH"):
            resolve_max_depth(Settings())

    def test_invalid_cli_value(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="--max-depth must be at least 1"):
            resolve_max_depth(Settings(), 0)
