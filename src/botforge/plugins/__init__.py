"""pluggy hooks for extra assembly rules and slot-command observers.

Third-party packages expose plugins under the ``botforge.plugins`` entry
point group. A plugin that raises never fails the botforge operation.
"""

from botforge.plugins.hookspecs import hookimpl
from botforge.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
