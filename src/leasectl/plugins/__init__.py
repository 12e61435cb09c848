"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``leasectl.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from leasectl.plugins.event_bus import EventBus
from leasectl.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager"]
