import shutil
from pathlib import Path

import psutil


def check_resources(cache_root: str | Path, min_free_gb: float = 10) -> None:
    free = shutil.disk_usage(cache_root).free / (1024**3)
    if free < min_free_gb:
        print(f"WARNING: Low disk space on cache volume ({free:.1f} GB free)")


def optimal_threads(cap: int = 16) -> int:
    # hashing + file I/O, threads mostly wait on disk: use logical cores
    cores = max(psutil.cpu_count(logical=True) or 1, 1)
    return max(1, min(cores, cap))
