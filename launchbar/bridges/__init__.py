"""LaunchBar Bridges - the osascript channel to LaunchBar."""

from .osascript import (
    OSASCRIPT,
    AppleScriptCommand,
    OsaScriptRunner,
    escape_applescript,
    LaunchBarError,
    ScriptSpawnError,
    ScriptExitError,
)

__all__ = [
    "OSASCRIPT",
    "AppleScriptCommand",
    "OsaScriptRunner",
    "escape_applescript",
    "LaunchBarError",
    "ScriptSpawnError",
    "ScriptExitError",
]
