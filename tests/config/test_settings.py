"""Tests for BotforgeSettings: unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import pytest

from botforge.config.settings import BotforgeSettings, ConfigFileError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "BOTFORGE_CONFIG",
        "BOTFORGE_JSON_OUTPUT",
        "BOTFORGE_VERBOSE",
        "BOTFORGE_HISTORY__CAPACITY",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = BotforgeSettings.load(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.history.capacity == 100
        assert settings.assembly.stop_on_first_error is False
        assert settings.items.placeholder_name == "Part {item_id}"
        assert settings.plugins.enabled is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = BotforgeSettings.load(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]

    def test_execution_options(self, tmp_path: Path) -> None:
        options = BotforgeSettings.load(start=tmp_path).assembly.execution_options()
        assert options.include_warnings is True
        assert options.skip_optional_rules is False


class TestTomlSource:
    def test_loads_discovered_toml(self, tmp_path: Path) -> None:
        (tmp_path / "botforge.toml").write_text(
            "[history]\ncapacity = 25\n[assembly]\ninclude_info = false\n"
        )
        nested = tmp_path / "bots" / "heavy"
        nested.mkdir(parents=True)
        settings = BotforgeSettings.load(start=nested)
        assert settings.history.capacity == 25
        assert settings.assembly.include_info is False
        assert settings.assembly.include_warnings is True
        assert settings.config_path == (tmp_path / "botforge.toml").resolve()

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "botforge.toml").write_text("")
        settings = BotforgeSettings.load(start=tmp_path)
        assert settings.history.capacity == 100

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "forge.toml"
        custom.parent.mkdir()
        custom.write_text('[items]\nplaceholder_name = "Unknown {item_id}"\n')
        settings = BotforgeSettings.load(config_path=str(custom), start=tmp_path)
        assert settings.items.placeholder_name == "Unknown {item_id}"
        assert settings.config_path == custom

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="not found"):
            BotforgeSettings.load(config_path=tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        bad = tmp_path / "botforge.toml"
        bad.write_text("[history\ncapacity = ")
        with pytest.raises(ConfigFileError, match="Invalid TOML"):
            BotforgeSettings.load(config_path=bad)

    def test_invalid_value(self, tmp_path: Path) -> None:
        bad = tmp_path / "botforge.toml"
        bad.write_text("[history]\ncapacity = 0\n")
        with pytest.raises(ConfigFileError, match="Invalid configuration"):
            BotforgeSettings.load(config_path=bad)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "botforge.toml").write_text("[history]\ncapacity = 25\n")
        monkeypatch.setenv("BOTFORGE_HISTORY__CAPACITY", "7")
        settings = BotforgeSettings.load(start=tmp_path)
        assert settings.history.capacity == 7

    def test_overrides_beat_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOTFORGE_VERBOSE", "false")
        settings = BotforgeSettings.load(start=tmp_path, verbose=True, json_output=True)
        assert settings.verbose is True
        assert settings.json_output is True

    def test_env_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOTFORGE_JSON_OUTPUT", "1")
        assert BotforgeSettings.load(start=tmp_path).json_output is True
