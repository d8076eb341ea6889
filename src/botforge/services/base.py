"""Common constructor and plugin notification for the slot services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from botforge.plugins.manager import PluginManager
    from botforge.services.catalog import SlotCatalog

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the shared :class:`SlotCatalog` and the optional plugin manager.

    Subclasses read slot data through ``self._catalog`` and report
    completed operations with :meth:`_notify_plugins`.
    """

    def __init__(self, catalog: SlotCatalog, plugins: PluginManager | None = None) -> None:
        self._catalog = catalog
        self._plugins = plugins

    @property
    def catalog(self) -> SlotCatalog:
        return self._catalog

    def _notify_plugins(self, hook_name: str, **payload: Any) -> list[str]:
        """Fire *hook_name* and return warnings instead of raising.

        The operation that triggered the hook has already happened, so a
        broken plugin can only downgrade it to a warning.
        """
        if self._plugins is None:
            return []
        try:
            self._plugins.dispatch(hook_name, payload)
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)
            return [f"Plugin hook {hook_name} failed"]
        return []
