"""Extension layer — converter plugins via pluggy.

Discovery: entry points in the ``propbind.converters`` group, plus plugins
registered directly by the application (the demo's full-name converter).
"""

from propbind.plugins.hookspecs import hookimpl
from propbind.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
