"""BotforgeSettings: one frozen object built from flags, environment and TOML.

Later sources lose to earlier ones:

* keyword overrides (the CLI's global flags)
* ``BOTFORGE_*`` environment variables, ``__`` for nesting
* the discovered or explicit ``botforge.toml``
* defaults on the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from botforge.config.discovery import ConfigFileError, find_config, read_toml
from botforge.config.models import (
    AssemblyConfigSection,
    HistoryConfig,
    ItemsConfig,
    PluginsConfig,
)

__all__ = ["BotforgeSettings", "ConfigFileError", "TomlSettingsSource"]

# pydantic-settings builds sources inside __init__, so the file chosen by
# load() travels to settings_customise_sources through here.
_pending = threading.local()


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feed the sections of one ``botforge.toml`` into pydantic."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self.toml_path = toml_path
        self._sections = read_toml(toml_path) if toml_path is not None else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, field_name in self._sections

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


class BotforgeSettings(BaseSettings):
    """Everything the context and the CLI need to know at startup.

    Attributes:
        config_path: The TOML file in effect, or None when only defaults apply.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BOTFORGE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    history: HistoryConfig = Field(default_factory=HistoryConfig)
    assembly: AssemblyConfigSection = Field(default_factory=AssemblyConfigSection)
    items: ItemsConfig = Field(default_factory=ItemsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "path", None))
        return init_settings, env_settings, toml

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> BotforgeSettings:
        """Build settings from *overrides* on top of env and TOML.

        Without *config_path* the file is discovered from *start*.

        Raises:
            ConfigFileError: An explicit *config_path* is missing, the TOML
                cannot be parsed, or a value fails validation.
        """
        path = _explicit_path(config_path) if config_path else find_config(start)
        _pending.path = path
        try:
            return cls(config_path=path, **overrides)
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise ConfigFileError(msg) from exc
        finally:
            _pending.path = None


def _explicit_path(config_path: str | Path) -> Path:
    path = Path(config_path)
    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise ConfigFileError(msg)
    return path
