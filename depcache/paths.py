# depcache/paths.py
from __future__ import annotations
import os
from pathlib import Path

# ---- Cache (relative to the invocation's working directory) ----
CACHE_DIR_NAME: str = "deps_cache"

# ---- Per-tree manifest (Unreal Engine dependency list) ----
MANIFEST_NAME: str = ".ue4dependencies"


def cache_root(override: str | os.PathLike | None = None) -> Path:
    """--cache-dir wins, then DEPCACHE_DIR, then ./deps_cache."""
    if override:
        return Path(override)
    env = os.environ.get("DEPCACHE_DIR")
    if env:
        return Path(env)
    return Path.cwd() / CACHE_DIR_NAME

__all__ = ["CACHE_DIR_NAME", "MANIFEST_NAME", "cache_root"]
