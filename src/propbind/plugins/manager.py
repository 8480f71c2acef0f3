"""Plugin discovery and converter registration.

Discovery: entry points (pip-installed) via pluggy setuptools entrypoints.
Capabilities: contributing converters to a TypeConverterRegistry.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from propbind.domain.converters import TypeConverterRegistry
from propbind.plugins.hookspecs import PROJECT_NAME, PropbindHookSpec

ENTRY_POINT_GROUP = "propbind.converters"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and converter registration."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PropbindHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``propbind.converters`` entry-point group.

        Returns a list of registered plugin names.
        """
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        logger.debug("Loaded %d plugin(s) from entry points", count)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def build_registry(self) -> TypeConverterRegistry:
        """Create a registry, let every plugin contribute, then freeze it.

        Pluggy calls implementations in LIFO registration order; they are
        replayed here in registration order so the last-registered plugin
        wins for a contested type.
        """
        registry = TypeConverterRegistry()
        impls = self._pm.hook.propbind_register_converters.get_hookimpls()
        for impl in impls:
            impl.function(registry=registry)
        return registry.freeze()

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            self._pm.register(plugin(), name=plugin_name)
