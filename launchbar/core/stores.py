#!/usr/bin/env python3
"""
LaunchBar Stores - persistent config and cache for an action

Both stores are diskcache.Cache instances:
- config lives under the action's support folder and keeps values until deleted
- cache lives under the action's cache folder; pass expire= to set() for a TTL

Only the directory wiring happens here; keys, expiry and serialization
belong to diskcache.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from diskcache import Cache

from .environment import LaunchBarEnv

logger = logging.getLogger("launchbar.stores")

CONFIG_NAME = "config"
CACHE_NAME = "cache"


def _store_directory(base: Optional[str], name: str) -> Optional[str]:
    if not base:
        return None
    return str(Path(base) / name)


@dataclass
class LaunchBarStores:
    """The two persistence handles of an action."""
    config: Cache
    cache: Cache

    def close(self):
        self.config.close()
        self.cache.close()


def open_config_store(env: LaunchBarEnv) -> Cache:
    """Config store in the action's support folder."""
    directory = _store_directory(env.support_path, CONFIG_NAME)
    if directory is None:
        logger.warning("LB_SUPPORT_PATH not set - config goes to a temporary directory")
    return Cache(directory)


def open_cache_store(env: LaunchBarEnv) -> Cache:
    """Cache store in the action's cache folder."""
    directory = _store_directory(env.cache_path, CACHE_NAME)
    if directory is None:
        logger.warning("LB_CACHE_PATH not set - cache goes to a temporary directory")
    return Cache(directory)


def open_stores(env: LaunchBarEnv) -> LaunchBarStores:
    stores = LaunchBarStores(config=open_config_store(env), cache=open_cache_store(env))
    logger.debug(f"Config store: {stores.config.directory}")
    logger.debug(f"Cache store: {stores.cache.directory}")
    return stores
