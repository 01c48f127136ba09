# depcache/builder.py
from __future__ import annotations
from pathlib import Path

from .driver import Outcome, Summary, run_parallel
from .manifest import Dependency, read_dependencies
from .store import CacheStore


def cache_dependency(store: CacheStore, root: Path, dep: Dependency) -> Outcome:
    if store.exists(dep.expected_hash):
        return Outcome.PRESENT

    data = (root / dep.name).read_bytes()  # OSError -> reported by the driver
    # only bytes that really hash to the manifest value may enter the cache
    if store.hasher.hash(data) != dep.expected_hash:
        return Outcome.MISMATCH

    if store.write_atomic(dep.expected_hash, data):
        return Outcome.CACHED
    return Outcome.PRESENT


def build_cache(store: CacheStore, root: str | Path, workers: int = 8) -> Summary:
    """Populate the store from every verified file listed in root's manifest."""
    root = Path(root)
    deps = read_dependencies(root, store.hasher)

    return run_parallel(
        deps,
        lambda d: cache_dependency(store, root, d),
        workers=workers,
        desc="Caching",
        describe=lambda d: str(root / d.name),
    )
