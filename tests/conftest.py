"""Shared pytest fixtures for botforge tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from botforge.domain.assignment import SkeletonSlotConfiguration
from botforge.domain.items import ItemInfo, StaticItemCatalog
from botforge.domain.types import Archetype, PartCategory
from botforge.plugins.manager import PluginManager
from botforge.services.assembly import BotAssemblyService
from botforge.services.assignment import SlotAssignmentService
from botforge.services.catalog import SlotCatalog
from botforge.services.compatibility import CompatibilityService

_ENV_OVERRIDES = ("BOTFORGE_CONFIG", "BOTFORGE_JSON_OUTPUT", "BOTFORGE_VERBOSE")


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo whatever configure_logging() did during the test."""
    saved = {
        name: (logging.getLogger(name).handlers[:], logging.getLogger(name).level)
        for name in ("", "botforge")
    }
    yield
    for name, (handlers, level) in saved.items():
        logger = logging.getLogger(name)
        logger.handlers[:] = handlers
        logger.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Empty working directory, no ``BOTFORGE_*`` overrides in the env."""
    monkeypatch.chdir(tmp_path)
    for var in _ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def catalog() -> SlotCatalog:
    return SlotCatalog()


@pytest.fixture
def compatibility(catalog: SlotCatalog) -> CompatibilityService:
    return CompatibilityService(catalog)


@pytest.fixture
def items() -> StaticItemCatalog:
    """A handful of named items used by assignment tests."""
    return StaticItemCatalog(
        [
            ItemInfo(item_id="visor-01", name="Scout Visor", category=PartCategory.HEAD),
            ItemInfo(item_id="claw-01", name="Grip Claw", category=PartCategory.ARM),
            ItemInfo(item_id="claw-02", name="Vice Claw", category=PartCategory.ARM),
            ItemInfo(item_id="strut-01", name="Strut Leg", category=PartCategory.LEG),
        ]
    )


@pytest.fixture
def assignment(
    catalog: SlotCatalog, compatibility: CompatibilityService, items: StaticItemCatalog
) -> SlotAssignmentService:
    return SlotAssignmentService(catalog, compatibility=compatibility, items=items)


@pytest.fixture
def assembly(catalog: SlotCatalog) -> BotAssemblyService:
    return BotAssemblyService(catalog)


@pytest.fixture
def plugin_manager() -> PluginManager:
    """A plugin manager with no entry-point discovery."""
    return PluginManager()


@pytest.fixture
def light_config(assignment: SlotAssignmentService) -> SkeletonSlotConfiguration:
    """Empty configuration on the light archetype."""
    return assignment.create_configuration(Archetype.LIGHT)
