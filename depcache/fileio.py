from __future__ import annotations
import os, stat, uuid
from pathlib import Path


def atomic_write(dst: Path, data: bytes, suffix: str = ".tmp") -> None:
    """Write data to dst through a hidden sibling temp file and os.replace.

    Readers see either the old dst or the complete new one. An existing dst
    keeps its permission bits; a new one gets 0666 minus the umask, like a
    plain open().
    """
    tmp = dst.with_name(f".{dst.name}.{uuid.uuid4().hex}{suffix}")
    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0), 0o666)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        try:
            os.chmod(tmp, stat.S_IMODE(os.stat(dst).st_mode))
        except FileNotFoundError:
            pass
        os.replace(tmp, dst)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
