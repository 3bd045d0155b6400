#!/usr/bin/env python3
"""
LaunchBar osascript Bridge - AppleScript command building and execution

Every command sent to LaunchBar goes through AppleScriptCommand, which
quotes and escapes caller values in one place. OsaScriptRunner spawns
/usr/bin/osascript once per command and waits for it to exit.

Architecture:
    Facade call → AppleScriptCommand → OsaScriptRunner → osascript → stdout
"""

import asyncio
import logging
import math
import numbers
from typing import List, Optional

logger = logging.getLogger("launchbar.osascript")

# Scripting bridge binary
OSASCRIPT = "/usr/bin/osascript"


class LaunchBarError(Exception):
    """Base class for failures talking to LaunchBar."""


class ScriptSpawnError(LaunchBarError):
    """The interpreter binary could not be started."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        super().__init__(f"Could not start {executable}: {reason}")


class ScriptExitError(LaunchBarError):
    """The interpreter exited with a non-zero status or was killed."""

    def __init__(self, script: str, returncode: int, stderr: str = ""):
        self.script = script
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no error output"
        super().__init__(f"osascript exited with status {returncode}: {detail}")


def escape_applescript(text: str) -> str:
    """
    Escape text for use inside an AppleScript string literal.

    Backslash and double quote are the only characters with meaning
    inside a quoted AppleScript string; both get a backslash prefix.

    Raises:
        TypeError: if text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return text.replace("\\", "\\\\").replace('"', '\\"')


class AppleScriptCommand:
    """
    Builder for a single-line AppleScript command.

    Keywords are appended verbatim, caller values only through string()
    or number(), so no value can end its literal early.

    Usage:
        script = (AppleScriptCommand.tell_launchbar("paste in frontmost application")
                  .string(text)
                  .build())
    """

    def __init__(self, *keywords: str):
        self._parts: List[str] = list(keywords)

    @classmethod
    def tell_launchbar(cls, *keywords: str) -> "AppleScriptCommand":
        return cls('tell application "LaunchBar" to', *keywords)

    def keyword(self, *keywords: str) -> "AppleScriptCommand":
        self._parts.extend(keywords)
        return self

    def string(self, value: str) -> "AppleScriptCommand":
        self._parts.append(f'"{escape_applescript(value)}"')
        return self

    def number(self, value) -> "AppleScriptCommand":
        # bool is Integral too
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(f"expected a number, got {type(value).__name__}")
        if isinstance(value, numbers.Integral):
            self._parts.append(str(int(value)))
        else:
            value = float(value)
            if not math.isfinite(value):
                raise ValueError(f"expected a finite number, got {value}")
            self._parts.append(repr(value))
        return self

    def build(self) -> str:
        return " ".join(self._parts)

    def __str__(self) -> str:
        return self.build()


class OsaScriptRunner:
    """Runs AppleScript through the osascript binary."""

    def __init__(self, executable: str = OSASCRIPT):
        self.executable = executable

    async def run(self, script: str) -> str:
        """
        Run a script and return its decoded stdout.

        Args:
            script: AppleScript source passed with -e

        Raises:
            ScriptSpawnError: osascript is missing or not executable
            ScriptExitError: osascript exited non-zero
        """
        logger.debug(f"Running: {script}")
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable, "-e", script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            logger.error(f"Cannot start {self.executable}: {e}")
            raise ScriptSpawnError(self.executable, str(e)) from e

        stdout, stderr = await process.communicate()
        stdout_text = stdout.decode("utf-8", errors="replace") if stdout else ""
        stderr_text = stderr.decode("utf-8", errors="replace") if stderr else ""

        if process.returncode != 0:
            logger.error(f"osascript failed ({process.returncode}): {stderr_text.strip()}")
            raise ScriptExitError(script, process.returncode, stderr_text)

        return stdout_text


def build_notification_script(text: str, title: str, subtitle: str,
                              callback_url: str, after_delay) -> str:
    """Script for LaunchBar's `display in notification center` command."""
    return (AppleScriptCommand.tell_launchbar("display in notification center")
            .string(text)
            .keyword("with title").string(title)
            .keyword("subtitle").string(subtitle)
            .keyword("callback URL").string(callback_url)
            .keyword("after delay").number(after_delay)
            .build())


def build_service_script(service: str, argv: Optional[str] = None) -> str:
    """Script for `perform service`, with the string clause only when argv is given."""
    command = AppleScriptCommand.tell_launchbar("perform service").string(service)
    if argv is not None:
        command.keyword("with string").string(argv)
    return command.build()
