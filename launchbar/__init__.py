"""
LaunchBar - Python helpers for LaunchBar actions

Provides the scripting surface of LaunchBar to Python scripts:
- Result items and JSON output
- Hide / remain active / keyboard focus
- Clipboard and paste
- Notifications and macOS services
- LB_* environment snapshot
- Persistent config and cache stores
"""

__version__ = "1.0.0"

from .bridges.osascript import (
    LaunchBarError,
    ScriptSpawnError,
    ScriptExitError,
    escape_applescript,
)
from .core.environment import LaunchBarEnv
from .core.item import Item
from .core.stores import LaunchBarStores
from .launchbar import LaunchBar, NotificationOptions, get_launchbar

__all__ = [
    "LaunchBar",
    "LaunchBarEnv",
    "LaunchBarStores",
    "Item",
    "NotificationOptions",
    "get_launchbar",
    "escape_applescript",
    "LaunchBarError",
    "ScriptSpawnError",
    "ScriptExitError",
]
