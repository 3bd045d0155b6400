#!/usr/bin/env python3
"""
LaunchBar Environment - snapshot of the LB_* variables

LaunchBar passes action context to the script process through environment
variables. The snapshot is taken once; later changes to os.environ are not
seen by it.
"""

import os
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger("launchbar.environment")

# Variable names, as documented by LaunchBar
LB_ACTION_PATH = "LB_ACTION_PATH"
LB_CACHE_PATH = "LB_CACHE_PATH"
LB_SUPPORT_PATH = "LB_SUPPORT_PATH"
LB_DEBUG_LOG_ENABLED = "LB_DEBUG_LOG_ENABLED"
LB_LAUNCHBAR_PATH = "LB_LAUNCHBAR_PATH"
LB_SCRIPT_TYPE = "LB_SCRIPT_TYPE"
LB_OPTION_COMMAND_KEY = "LB_OPTION_COMMAND_KEY"
LB_OPTION_ALTERNATE_KEY = "LB_OPTION_ALTERNATE_KEY"
LB_OPTION_SHIFT_KEY = "LB_OPTION_SHIFT_KEY"
LB_OPTION_CONTROL_KEY = "LB_OPTION_CONTROL_KEY"
LB_OPTION_SPACE_KEY = "LB_OPTION_SPACE_KEY"
LB_OPTION_RUN_IN_BACKGROUND = "LB_OPTION_RUN_IN_BACKGROUND"
LB_OPTION_LIVE_FEEDBACK = "LB_OPTION_LIVE_FEEDBACK"


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name) == "1"


@dataclass(frozen=True)
class LaunchBarEnv:
    """
    Read-only view of the action's LaunchBar context.

    Attributes:
        action_path: the .lbaction bundle of the running action
        cache_path: the action's folder in ~/Library/Caches/at.obdev.LaunchBar/Actions/
        support_path: the action's folder in ~/Library/Application Support/LaunchBar/Action Support/
        is_debug_log_enabled: debug logging is on for this action
        application_path: the LaunchBar.app bundle
        script_type: "default", "suggestions", ...
        command_key .. space_key: modifier held when the action was invoked
        action_runs_in_background: the action runs in the background
        is_live_feedback_enabled: Live Feedback is on for this action
    """
    action_path: Optional[str] = None
    cache_path: Optional[str] = None
    support_path: Optional[str] = None
    is_debug_log_enabled: bool = False
    application_path: Optional[str] = None
    script_type: Optional[str] = None
    command_key: bool = False
    alternate_key: bool = False
    shift_key: bool = False
    control_key: bool = False
    space_key: bool = False
    action_runs_in_background: bool = False
    is_live_feedback_enabled: bool = False

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "LaunchBarEnv":
        """Build a snapshot from os.environ, or from the given mapping."""
        if environ is None:
            environ = os.environ

        env = cls(
            action_path=environ.get(LB_ACTION_PATH),
            cache_path=environ.get(LB_CACHE_PATH),
            support_path=environ.get(LB_SUPPORT_PATH),
            is_debug_log_enabled=_flag(environ, LB_DEBUG_LOG_ENABLED),
            application_path=environ.get(LB_LAUNCHBAR_PATH),
            script_type=environ.get(LB_SCRIPT_TYPE),
            command_key=_flag(environ, LB_OPTION_COMMAND_KEY),
            alternate_key=_flag(environ, LB_OPTION_ALTERNATE_KEY),
            shift_key=_flag(environ, LB_OPTION_SHIFT_KEY),
            control_key=_flag(environ, LB_OPTION_CONTROL_KEY),
            space_key=_flag(environ, LB_OPTION_SPACE_KEY),
            action_runs_in_background=_flag(environ, LB_OPTION_RUN_IN_BACKGROUND),
            is_live_feedback_enabled=_flag(environ, LB_OPTION_LIVE_FEEDBACK)
        )

        if env.action_path is None:
            logger.debug("LB_ACTION_PATH not set - not running inside LaunchBar?")
        return env

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot keyed by LaunchBar's camelCase names."""
        return {_camel_case(f.name): getattr(self, f.name) for f in fields(self)}


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
