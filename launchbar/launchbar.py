#!/usr/bin/env python3
"""
LaunchBar - Main Entry Point

Facade over LaunchBar's AppleScript surface for Python actions:
1. Talks to LaunchBar through osascript (hide, clipboard, paste, notifications, services)
2. Exposes the LB_* environment as a LaunchBarEnv snapshot
3. Hands out persistent config/cache stores rooted in the action's folders

Usage:
    lb = get_launchbar()
    await lb.paste("Hello")
    lb.output([Item(title="Done")])
"""

import sys
import asyncio
import logging
import argparse
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, TextIO

from .bridges.osascript import (
    OSASCRIPT,
    AppleScriptCommand,
    LaunchBarError,
    OsaScriptRunner,
    build_notification_script,
    build_service_script,
)
from .core.environment import LaunchBarEnv
from .core.item import dumps
from .core.stores import LaunchBarStores, open_stores
from .core.text_processing import TextArguments, process_lines

logger = logging.getLogger("launchbar")

DEFAULT_NOTIFICATION_TITLE = "LaunchBar"


@dataclass
class NotificationOptions:
    """Fields of a Notification Center message posted through LaunchBar."""
    text: str = ""
    title: str = DEFAULT_NOTIFICATION_TITLE
    subtitle: str = ""
    callback_url: str = ""
    after_delay: float = 0


def configure_logging(env: LaunchBarEnv):
    """Log to stderr; stdout belongs to LaunchBar's JSON output."""
    level = logging.DEBUG if env.is_debug_log_enabled else logging.INFO
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )


class LaunchBar:
    """
    LaunchBar automation facade.

    Every coroutine runs exactly one osascript process and waits for it.
    Failures propagate as ScriptSpawnError / ScriptExitError (both
    LaunchBarError) or TypeError for values that cannot be embedded.
    """

    def __init__(self, env: Optional[LaunchBarEnv] = None,
                 runner: Optional[OsaScriptRunner] = None,
                 stores: Optional[LaunchBarStores] = None,
                 stdout: Optional[TextIO] = None):
        self.env = env if env is not None else LaunchBarEnv.from_environ()
        self.runner = runner or OsaScriptRunner()
        self.stdout = stdout
        self._stores = stores

    # Stores

    @property
    def stores(self) -> LaunchBarStores:
        if self._stores is None:
            self._stores = open_stores(self.env)
        return self._stores

    @property
    def config(self):
        """Persistent store in the action's support folder."""
        return self.stores.config

    @property
    def cache(self):
        """Cache store in the action's cache folder; use set(key, value, expire=seconds)."""
        return self.stores.cache

    def close(self):
        if self._stores is not None:
            self._stores.close()
            self._stores = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Output

    def output(self, data: Any):
        """Write data as JSON for LaunchBar to display."""
        stream = self.stdout or sys.stdout
        stream.write(dumps(data) + "\n")
        stream.flush()

    # Commands

    async def _run(self, command) -> str:
        return await self.runner.run(str(command))

    async def hide(self):
        """Hide LaunchBar."""
        await self._run(AppleScriptCommand.tell_launchbar("hide"))

    async def remain_active(self):
        """Keep LaunchBar open after the current action."""
        await self._run(AppleScriptCommand.tell_launchbar("remain active"))

    async def has_keyboard_focus(self) -> bool:
        result = await self._run(AppleScriptCommand.tell_launchbar("return has keyboard focus"))
        return result.strip() == "true"

    async def set_clipboard_string(self, text: str):
        await self._run(
            AppleScriptCommand.tell_launchbar("set the clipboard to").string(text)
        )

    async def clear_clipboard(self):
        await self._run(AppleScriptCommand("set the clipboard to").string(""))

    async def paste(self, text: str):
        """Paste text in the frontmost application."""
        await self._run(
            AppleScriptCommand.tell_launchbar("paste in frontmost application").string(text)
        )

    async def perform_service(self, service: str, argv: Optional[str] = None):
        """
        Perform a macOS service (System Settings > Keyboard > Shortcuts > Services).

        Args:
            service: the service's menu title
            argv: optional string handed to the service
        """
        await self._run(build_service_script(service, argv))

    async def display_notification(self, options: Optional[NotificationOptions] = None,
                                   **fields):
        """
        Display a message in Notification Center.

        Pass either a NotificationOptions or its fields as keywords
        (text, title, subtitle, callback_url, after_delay).
        """
        if options is not None and fields:
            raise TypeError("pass NotificationOptions or keyword fields, not both")
        if options is None:
            options = NotificationOptions(**fields)

        await self._run(build_notification_script(
            text=options.text,
            title=options.title or DEFAULT_NOTIFICATION_TITLE,
            subtitle=options.subtitle,
            callback_url=options.callback_url,
            after_delay=options.after_delay
        ))

    async def text_action(self, text_arguments: TextArguments,
                          text_processing_function: Callable[[str], str],
                          joiner: str = "\n",
                          preview_on_command_key: bool = True) -> List[str]:
        """
        Boilerplate for text-processing actions.

        Runs text_processing_function over every line of the arguments. With
        the command key held the lines are shown as LaunchBar items instead
        of being pasted into the frontmost application.

        Returns:
            The processed lines, in input order
        """
        lines = process_lines(text_arguments, text_processing_function)

        if preview_on_command_key and self.env.command_key:
            self.output([{"title": line} for line in lines])
        else:
            await self.paste(joiner.join(lines))
        return lines


# Global instance
_launchbar: Optional[LaunchBar] = None


def get_launchbar() -> LaunchBar:
    """Get or create the process-wide LaunchBar, configuring logging on first use."""
    global _launchbar
    if _launchbar is None:
        env = LaunchBarEnv.from_environ()
        configure_logging(env)
        _launchbar = LaunchBar(env=env)
    return _launchbar


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launchbar",
        description="Control LaunchBar from shell-script actions"
    )
    parser.add_argument("--osascript", default=OSASCRIPT, help="Path to osascript")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("hide", help="Hide LaunchBar")
    sub.add_parser("remain-active", help="Keep LaunchBar open")
    sub.add_parser("has-focus", help="Print true if LaunchBar has keyboard focus")

    clip = sub.add_parser("clipboard-set", help="Set the clipboard")
    clip.add_argument("text")
    sub.add_parser("clipboard-clear", help="Clear the clipboard")

    paste = sub.add_parser("paste", help="Paste text in the frontmost application")
    paste.add_argument("text")

    service = sub.add_parser("service", help="Perform a macOS service")
    service.add_argument("name")
    service.add_argument("argv", nargs="?")

    notify = sub.add_parser("notify", help="Show a notification")
    notify.add_argument("--text", default="")
    notify.add_argument("--title", default=DEFAULT_NOTIFICATION_TITLE)
    notify.add_argument("--subtitle", default="")
    notify.add_argument("--callback-url", default="")
    notify.add_argument("--delay", type=float, default=0)

    sub.add_parser("env", help="Print the LaunchBar environment as JSON")
    return parser


async def _dispatch(lb: LaunchBar, args: argparse.Namespace):
    if args.command == "hide":
        await lb.hide()
    elif args.command == "remain-active":
        await lb.remain_active()
    elif args.command == "has-focus":
        focused = await lb.has_keyboard_focus()
        print("true" if focused else "false", file=lb.stdout or sys.stdout)
    elif args.command == "clipboard-set":
        await lb.set_clipboard_string(args.text)
    elif args.command == "clipboard-clear":
        await lb.clear_clipboard()
    elif args.command == "paste":
        await lb.paste(args.text)
    elif args.command == "service":
        await lb.perform_service(args.name, args.argv)
    elif args.command == "notify":
        await lb.display_notification(
            text=args.text,
            title=args.title,
            subtitle=args.subtitle,
            callback_url=args.callback_url,
            after_delay=args.delay
        )
    elif args.command == "env":
        lb.output(lb.env.to_dict())


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)

    env = LaunchBarEnv.from_environ()
    configure_logging(env)
    lb = LaunchBar(env=env, runner=OsaScriptRunner(args.osascript))

    try:
        asyncio.run(_dispatch(lb, args))
    except (LaunchBarError, TypeError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    finally:
        lb.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
