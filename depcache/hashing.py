# depcache/hashing.py
from __future__ import annotations
import hashlib, os, re
from dataclasses import dataclass
from typing import Callable

import xxhash

DEFAULT_ALGORITHM = "sha1"  # .ue4dependencies ExpectedHash is SHA-1
_HEX = re.compile(r"[0-9a-f]+")


@dataclass(frozen=True)
class Hasher:
    name: str
    hex_length: int
    _fn: Callable[[bytes], str]

    def hash(self, data: bytes) -> str:
        return self._fn(data)

    def is_digest(self, s: str) -> bool:
        return len(s) == self.hex_length and _HEX.fullmatch(s) is not None


def _sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()

def _sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()

def _xxh3_128(data: bytes) -> str:
    return xxhash.xxh3_128(data).hexdigest()


ALGORITHMS: dict[str, Hasher] = {
    "sha1":     Hasher("sha1", 40, _sha1),
    "sha256":   Hasher("sha256", 64, _sha256),
    "xxh3_128": Hasher("xxh3_128", 32, _xxh3_128),
}


def get_hasher(name: str | None = None) -> Hasher:
    """Resolve a hasher by name; falls back to DEPCACHE_HASH, then sha1."""
    name = name or os.environ.get("DEPCACHE_HASH") or DEFAULT_ALGORITHM
    try:
        return ALGORITHMS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(ALGORITHMS))
        raise ValueError(f"unknown hash algorithm {name!r} (known: {known})") from None
