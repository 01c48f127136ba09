# depcache/store.py
from __future__ import annotations
from pathlib import Path
from typing import Iterator

from .fileio import atomic_write
from .hashing import Hasher, get_hasher


class CacheRootMissing(Exception):
    """The cache root directory does not exist; nothing can run."""

class CacheMiss(Exception):
    """No object is stored under the requested digest."""

class InvalidDigest(ValueError):
    pass


class CacheStore:
    """Flat directory of objects, each named by the hex digest of its content.

    The only mutation is write_atomic: write a private temp file next to the
    final name, then os.replace it into place. Readers see either no object
    or a complete one. Concurrent writers of the same digest produce the same
    bytes, so whichever rename lands last is harmless.
    """

    def __init__(self, root: str | Path, hasher: Hasher | None = None):
        self.root = Path(root)
        self.hasher = hasher or get_hasher()

    @classmethod
    def open(cls, root: str | Path, hasher: Hasher | None = None) -> "CacheStore":
        root = Path(root)
        if not root.is_dir():
            raise CacheRootMissing(f"{root} directory does not exist")
        return cls(root, hasher)

    def _check(self, digest: str) -> str:
        if not self.hasher.is_digest(digest):
            raise InvalidDigest(
                f"malformed {self.hasher.name} digest: {digest!r} "
                f"(expected {self.hasher.hex_length} lowercase hex chars)")
        return digest

    def path(self, digest: str) -> Path:
        return self.root / self._check(digest)

    def exists(self, digest: str) -> bool:
        return self.path(digest).is_file()

    def read(self, digest: str) -> bytes:
        try:
            return self.path(digest).read_bytes()
        except FileNotFoundError:
            raise CacheMiss(digest) from None

    def write_atomic(self, digest: str, data: bytes) -> bool:
        """Store data under digest. Returns False if it was already present."""
        dst = self.path(digest)
        if dst.exists():
            return False
        # temp name is unique per writer and lives in the root, so the rename never copies
        atomic_write(dst, data, suffix=".tmp")
        return True

    def __iter__(self) -> Iterator[str]:
        for p in self.root.iterdir():
            if p.is_file() and self.hasher.is_digest(p.name):
                yield p.name
