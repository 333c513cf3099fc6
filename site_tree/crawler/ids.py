# site_tree/crawler/ids.py
"""Per-crawl identifier generator."""
from __future__ import annotations

import itertools
import threading

__all__ = ("IdGenerator",)


class IdGenerator:
    """Monotonic string ids (``"1"``, ``"2"``, ...) safe for concurrent callers."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            return str(next(self._counter))
