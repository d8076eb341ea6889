"""Thin wrapper over ``pluggy.PluginManager`` for botforge's two hooks.

Plugins arrive either through the ``botforge.plugins`` entry-point group
or by direct registration. ``register_assembly_rules`` results are
filtered here; ``post_slot_command`` is fired through :meth:`dispatch`.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from typing import Any

import pluggy

from botforge.domain.validation import ValidationRule
from botforge.plugins.hookspecs import PROJECT_NAME, BotforgeHookSpec

ENTRY_POINT_GROUP = "botforge.plugins"
_IMPL_MARKER = f"{PROJECT_NAME}_impl"

logger = logging.getLogger(__name__)


class PluginManager:
    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(BotforgeHookSpec)
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(self) -> list[str]:
        """Import every installed ``botforge.plugins`` entry point.

        Returns the names of all plugins registered afterwards.
        """
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        logger.debug("Loaded %d entry point(s) from %s", count, ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        name = name or type(plugin).__name__
        self._pm.register(plugin, name=name)
        logger.debug("Registered plugin: %s", name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._name_of(p) for p in self._pm.get_plugins()]

    def collect_assembly_rules(self) -> list[ValidationRule[Any]]:
        """Rules contributed by ``register_assembly_rules`` implementations.

        Each implementation is called on its own so that one that raises
        costs only its own rules. Anything that is not a
        :class:`ValidationRule` is dropped with a warning.
        """
        rules: list[ValidationRule[Any]] = []
        for impl in self._pm.hook.register_assembly_rules.get_hookimpls():
            try:
                contributed = impl.function()
            except Exception:
                logger.warning(
                    "Failed to collect assembly rules from plugin %s",
                    impl.plugin_name,
                    exc_info=True,
                )
                continue
            rules.extend(_only_rules(impl.plugin_name, contributed or ()))
        return rules

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Fire *hook_name* with *payload* as keyword arguments.

        Errors from implementations are not caught here.
        """
        caller = getattr(self._pm.hook, hook_name)
        caller(**payload)

    def _name_of(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or type(plugin).__name__

    def _normalize_plugin_instances(self) -> None:
        """Swap plugin classes registered by entry points for instances.

        pluggy calls hook implementations on whatever object was
        registered, and an unbound method on a class has no ``self``.
        """
        classes = [p for p in self._pm.get_plugins() if inspect.isclass(p)]
        for cls in classes:
            if not self._has_hook_impls(cls):
                continue
            name = self._pm.get_name(cls) or cls.__name__
            self._pm.unregister(cls)
            try:
                instance = cls()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
            logger.debug("Instantiated entry-point plugin: %s", name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """True when a public attribute of *cls* carries pluggy's impl marker."""
        return any(
            not attr.startswith("_") and getattr(member, _IMPL_MARKER, None) is not None
            for attr, member in inspect.getmembers(cls, callable)
        )


def _only_rules(plugin_name: str, contributed: Iterable[Any]) -> Iterable[ValidationRule[Any]]:
    for item in contributed:
        if isinstance(item, ValidationRule):
            yield item
        else:
            logger.warning("Plugin %s returned a non-rule object: %r", plugin_name, item)
