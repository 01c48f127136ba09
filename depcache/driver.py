# depcache/driver.py
from __future__ import annotations
import io, os, sys
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence, TypeVar

from tqdm import tqdm

T = TypeVar("T")


class Outcome(Enum):
    CACHED = "cached"          # new object written
    PRESENT = "present"        # object already in cache
    MISMATCH = "mismatch"      # local file is not the blessed version
    RESTORED = "restored"
    UP_TO_DATE = "up-to-date"
    MISSING = "missing"        # not in cache, file left as-is
    FAILED = "failed"


@dataclass
class Summary:
    total: int = 0
    counts: Counter = field(default_factory=Counter)

    def count(self, outcome: Outcome) -> int:
        return self.counts[outcome]

    @property
    def failed(self) -> int:
        return self.counts[Outcome.FAILED]

    def __str__(self) -> str:
        parts = [f"{o.value}={self.counts[o]}" for o in Outcome if self.counts[o]]
        return f"done. {', '.join(parts) or 'nothing to do'}, total={self.total}"


def log(msg: str) -> None:
    """Diagnostic line that does not tear a live progress bar."""
    try:
        tqdm.write(msg, file=_tqdm_file())
    except Exception:
        print(msg, file=sys.stderr if sys.stderr is not None else sys.stdout)


def run_parallel(items: Sequence[T], task: Callable[[T], Outcome], *, workers: int,
                 desc: str = "Processing", describe: Callable[[T], str] = str) -> Summary:
    """Run task(item) for every item on a thread pool.

    Items are independent; completion order is irrelevant. A task that raises
    is counted as FAILED and reported, the rest of the batch carries on.
    """
    summary = Summary(total=len(items))
    if not items:
        return summary

    with tqdm(total=len(items), desc=desc, unit="file", file=_tqdm_file(), disable=_tqdm_disable()) as bar:
        with ThreadPoolExecutor(max_workers=max(1, workers)) as ex:
            futs = {ex.submit(task, it): it for it in items}
            for fut in as_completed(futs):
                try:
                    res = fut.result()
                except Exception as e:
                    res = Outcome.FAILED
                    log(f"error processing {describe(futs[fut])}: {e}")
                summary.counts[res] += 1
                bar.update(1)
    return summary


def _stderr():
    # pythonw and some CI wrappers start with sys.stderr = None
    f = getattr(sys, "stderr", None)
    return f if (f is not None and hasattr(f, "write")) else None

def _tqdm_file():
    return _stderr() or io.StringIO()

def _tqdm_disable() -> bool:
    """DEPCACHE_TQDM=1 hides the bar, =0 shows it even when stderr is not a tty."""
    env = os.environ.get("DEPCACHE_TQDM")
    if env in ("0", "1"):
        return env == "1"
    f = _stderr()
    return f is None or not getattr(f, "isatty", lambda: False)()
