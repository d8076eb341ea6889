"""BotforgeContext: explicit owner of every service instance.

One context is built per application (or per test). Services never reach
for module-level singletons; they receive the catalog and plugin manager
from here.
"""

from __future__ import annotations

import logging

from botforge.config.settings import BotforgeSettings
from botforge.domain.items import ItemCatalog
from botforge.plugins.manager import PluginManager
from botforge.services.assembly import BotAssemblyService
from botforge.services.assignment import SlotAssignmentService
from botforge.services.catalog import SlotCatalog
from botforge.services.compatibility import CompatibilityService

logger = logging.getLogger(__name__)


class BotforgeContext:
    """Wire the catalog, plugins, and services from one settings object.

    Args:
        settings: Resolved settings. Defaults are used when omitted.
        catalog: Pre-built catalog (custom tables). Built-in tables otherwise.
        plugins: Pre-built plugin manager. When omitted and plugins are
            enabled, entry-point plugins are discovered.
        items: Optional item catalog for display-name resolution.
    """

    def __init__(
        self,
        settings: BotforgeSettings | None = None,
        *,
        catalog: SlotCatalog | None = None,
        plugins: PluginManager | None = None,
        items: ItemCatalog | None = None,
    ) -> None:
        self.settings = settings or BotforgeSettings()
        self.catalog = catalog or SlotCatalog()

        if plugins is None and self.settings.plugins.enabled:
            plugins = PluginManager()
            loaded = plugins.discover_and_load()
            if loaded:
                logger.info("Loaded plugins: %s", ", ".join(loaded))
        self.plugins = plugins

        self.compatibility = CompatibilityService(self.catalog, self.plugins)
        self.assignment = SlotAssignmentService(
            self.catalog,
            self.plugins,
            compatibility=self.compatibility,
            items=items,
            history_capacity=self.settings.history.capacity,
            placeholder_name=self.settings.items.placeholder_name,
        )
        self.assembly = BotAssemblyService(
            self.catalog,
            self.plugins,
            options=self.settings.assembly.execution_options(),
        )
