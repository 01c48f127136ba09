# depcache/restorer.py
from __future__ import annotations
from pathlib import Path

from .driver import Outcome, Summary, log, run_parallel
from .fileio import atomic_write
from .hashing import Hasher
from .manifest import Dependency, read_dependencies, resolve_duplicates
from .store import CacheMiss, CacheStore


def needs_restore(hasher: Hasher, path: Path, expected: str) -> bool:
    """True when the file is absent, unreadable, or not the expected content."""
    try:
        data = path.read_bytes()
    except OSError:
        return True
    return hasher.hash(data) != expected


def restore_dependency(store: CacheStore, root: Path, dep: Dependency) -> Outcome:
    dst = root / dep.name
    if not needs_restore(store.hasher, dst, dep.expected_hash):
        return Outcome.UP_TO_DATE

    try:
        data = store.read(dep.expected_hash)
    except CacheMiss:
        log(f"missing in cache: {dep.name}")
        return Outcome.MISSING

    dst.parent.mkdir(parents=True, exist_ok=True)
    atomic_write(dst, data, suffix=".restore")
    return Outcome.RESTORED


def restore_cache(store: CacheStore, root: str | Path, workers: int = 8) -> Summary:
    """Bring every file listed in root's manifest back to its expected content."""
    root = Path(root)
    deps, conflicts = resolve_duplicates(read_dependencies(root, store.hasher))
    for name in conflicts:
        log(f"duplicate entry with different hashes, using the last one: {name}")

    return run_parallel(
        deps,
        lambda d: restore_dependency(store, root, d),
        workers=workers,
        desc="Restoring",
        describe=lambda d: str(root / d.name),
    )
