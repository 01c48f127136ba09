# depcache/manifest.py
from __future__ import annotations
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Iterable

from .hashing import Hasher
from .paths import MANIFEST_NAME


class ManifestError(Exception):
    """The tree's dependency list is missing or unusable."""


@dataclass(frozen=True)
class Dependency:
    name: str           # tree-relative, '/' separated
    expected_hash: str  # lowercase hex


def _local(tag: str) -> str:
    # strip an "{namespace}" prefix if the document declares a default ns
    return tag.rsplit("}", 1)[-1]


def _check_name(name: str, where: Path) -> None:
    p = PurePosixPath(name.replace("\\", "/"))
    if not name or p.is_absolute() or PureWindowsPath(name).drive or ".." in p.parts:
        raise ManifestError(f"{where}: invalid dependency path {name!r}")


def read_dependencies(root: str | Path, hasher: Hasher | None = None,
                      manifest_name: str = MANIFEST_NAME) -> list[Dependency]:
    """Parse <root>/.ue4dependencies into Dependency records, in manifest order.

    Every <File> element must carry Name and ExpectedHash attributes. When a
    hasher is given, each hash is checked against its digest format so a bad
    manifest fails here instead of as a pile of per-file cache misses.
    """
    path = Path(root) / manifest_name
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ManifestError(
            f"could not read {manifest_name}, is this an Unreal Engine repository? ({e})") from e
    try:
        doc = ET.fromstring(raw)
    except ET.ParseError as e:
        raise ManifestError(f"failed to parse {path}: {e}") from e

    deps: list[Dependency] = []
    for node in doc.iter():
        if _local(node.tag) != "File":
            continue
        name = node.get("Name")
        if name is None:
            raise ManifestError(f"{path}: missing attribute 'Name'")
        expected = node.get("ExpectedHash")
        if expected is None:
            raise ManifestError(f"{path}: missing attribute 'ExpectedHash' for {name}")
        _check_name(name, path)
        expected = expected.strip().lower()
        if hasher is not None and not hasher.is_digest(expected):
            raise ManifestError(
                f"{path}: {name} has a malformed {hasher.name} hash {expected!r}")
        deps.append(Dependency(name.replace("\\", "/"), expected))
    return deps


def resolve_duplicates(deps: Iterable[Dependency]) -> tuple[list[Dependency], list[str]]:
    """Last entry wins for repeated names.

    Each name keeps the slot of its first appearance. Returns the collapsed
    list and the names whose entries disagree on the expected hash.
    """
    winner: dict[str, Dependency] = {}
    seen_hashes: dict[str, set[str]] = {}
    for d in deps:
        winner[d.name] = d  # dict keeps first insertion position
        seen_hashes.setdefault(d.name, set()).add(d.expected_hash)
    conflicts = [n for n, hs in seen_hashes.items() if len(hs) > 1]
    return list(winner.values()), conflicts
