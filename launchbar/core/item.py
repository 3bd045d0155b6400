#!/usr/bin/env python3
"""
LaunchBar Item - one entry in an action's result list

Items are plain records; LaunchBar reads them as JSON from the action's
stdout. Unset fields are left out of the JSON entirely.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# dataclass field → LaunchBar JSON key
ITEM_KEYS = {
    "title": "title",
    "subtitle": "subtitle",
    "url": "url",
    "path": "path",
    "icon": "icon",
    "icon_font": "iconFont",
    "icon_is_template": "iconIsTemplate",
    "quick_look_url": "quickLookURL",
    "action": "action",
    "action_returns_items": "actionReturnsItems",
    "action_runs_in_background": "actionRunsInBackground",
    "action_bundle_identifier": "actionBundleIdentifier",
    "action_argument": "actionArgument",
}


@dataclass
class Item:
    """A result item shown by LaunchBar."""
    title: Optional[str] = None
    subtitle: Optional[str] = None
    url: Optional[str] = None
    path: Optional[str] = None
    icon: Optional[str] = None
    icon_font: Optional[str] = None
    icon_is_template: Optional[bool] = None
    quick_look_url: Optional[str] = None
    action: Optional[str] = None
    action_returns_items: Optional[bool] = None
    action_runs_in_background: Optional[bool] = None
    action_bundle_identifier: Optional[str] = None
    action_argument: Any = None
    children: Optional[List["Item"]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            key: getattr(self, attr)
            for attr, key in ITEM_KEYS.items()
            if getattr(self, attr) is not None
        }
        if self.children is not None:
            data["children"] = [
                child.to_dict() if isinstance(child, Item) else child
                for child in self.children
            ]
        return data


class ItemEncoder(json.JSONEncoder):
    """JSON encoder that understands Item anywhere in the output."""

    def default(self, o):
        if isinstance(o, Item):
            return o.to_dict()
        return super().default(o)


def dumps(data: Any) -> str:
    return json.dumps(data, cls=ItemEncoder)
