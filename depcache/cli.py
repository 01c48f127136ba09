from __future__ import annotations
import argparse, sys
from pathlib import Path

from .builder import build_cache
from .hashing import ALGORITHMS, get_hasher
from .manifest import ManifestError
from .paths import cache_root
from .restorer import restore_cache
from .store import CacheRootMissing, CacheStore
from .system import check_resources, optimal_threads


def _run_trees(args: argparse.Namespace, verb: str, fn) -> int:
    try:
        hasher = get_hasher(args.hash)
        store = CacheStore.open(cache_root(args.cache_dir), hasher)
    except (ValueError, CacheRootMissing) as e:
        raise SystemExit(str(e))

    check_resources(store.root)
    threads = args.threads or optimal_threads()

    failed = 0
    for root in args.roots:
        print(f"{verb} {root}")
        # one bad tree must not stop the others
        try:
            summary = fn(store, Path(root), workers=threads)
        except ManifestError as e:
            print(f"error: {root}: {e}", file=sys.stderr)
            failed += 1
            continue
        print(summary)
    return 1 if failed else 0


def _cmd_cache(args: argparse.Namespace) -> int:
    return _run_trees(args, "caching", build_cache)


def _cmd_restore(args: argparse.Namespace) -> int:
    return _run_trees(args, "restoring", restore_cache)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="depcache", description="Content-addressed cache for Unreal Engine dependency files")
    sub = p.add_subparsers(dest="cmd", required=True, metavar="{cache,restore}")

    def common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("roots", nargs="+", metavar="ROOT", help="Unreal Engine root directory")
        sp.add_argument("--threads", type=int, help="Worker threads")
        sp.add_argument("--cache-dir", type=str, help="Cache directory (default: ./deps_cache)")
        sp.add_argument("--hash", type=str, choices=sorted(ALGORITHMS), help="Digest algorithm of the manifest hashes")

    c = sub.add_parser("cache", help="Store verified dependency files in the cache")
    common(c)
    c.set_defaults(func=_cmd_cache)

    r = sub.add_parser("restore", help="Restore missing or stale dependency files from the cache")
    common(r)
    r.set_defaults(func=_cmd_restore)

    return p

def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)
