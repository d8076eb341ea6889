"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, botforge.toml only contains overrides.
An empty or missing file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from botforge.domain.validation import RuleExecutionOptions


class HistoryConfig(BaseModel):
    """[history] section."""

    model_config = {"frozen": True}

    capacity: int = Field(default=100, ge=1)


class AssemblyConfigSection(BaseModel):
    """[assembly] section: default rule execution options."""

    model_config = {"frozen": True}

    stop_on_first_error: bool = False
    include_warnings: bool = True
    include_info: bool = True
    skip_optional_rules: bool = False

    def execution_options(self) -> RuleExecutionOptions:
        return RuleExecutionOptions(**self.model_dump())


class ItemsConfig(BaseModel):
    """[items] section."""

    model_config = {"frozen": True}

    placeholder_name: str = "Part {item_id}"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class BotforgeConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    history: HistoryConfig = Field(default_factory=HistoryConfig)
    assembly: AssemblyConfigSection = Field(default_factory=AssemblyConfigSection)
    items: ItemsConfig = Field(default_factory=ItemsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
