"""Shared test fixtures."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Callable
from xml.sax.saxutils import quoteattr

import pytest

from depcache.hashing import get_hasher
from depcache.store import CacheStore

MakeTree = Callable[..., Path]


def sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def manifest_xml(entries: list[tuple[str, str]]) -> str:
    files = "\n".join(
        f"    <File Name={quoteattr(name)} ExpectedHash={quoteattr(h)} />" for name, h in entries
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<WorkingManifest xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'
        ' xmlns:xsd="http://www.w3.org/2001/XMLSchema">\n'
        "  <Files>\n"
        f"{files}\n"
        "  </Files>\n"
        "</WorkingManifest>\n"
    )


@pytest.fixture(autouse=True)
def _quiet_progress(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEPCACHE_TQDM", "1")
    monkeypatch.delenv("DEPCACHE_HASH", raising=False)
    monkeypatch.delenv("DEPCACHE_DIR", raising=False)


@pytest.fixture
def cache(tmp_path: Path) -> CacheStore:
    root = tmp_path / "deps_cache"
    root.mkdir()
    return CacheStore.open(root, get_hasher("sha1"))


@pytest.fixture
def make_tree(tmp_path: Path) -> MakeTree:
    """Create a source tree with files and a .ue4dependencies manifest.

    ``entries`` defaults to one entry per file carrying its real SHA-1.
    """

    def _make(
        name: str,
        files: dict[str, bytes],
        entries: list[tuple[str, str]] | None = None,
    ) -> Path:
        root = tmp_path / name
        root.mkdir()
        for rel, data in files.items():
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(data)
        if entries is None:
            entries = [(rel, sha1(data)) for rel, data in files.items()]
        (root / ".ue4dependencies").write_text(manifest_xml(entries), encoding="utf-8")
        return root

    return _make
