# site_tree/crawler/claims.py
"""
URL normalization and the dedup store used to guarantee one page per URL.
"""
from __future__ import annotations

import threading
from typing import Set

__all__ = ("normalize_url", "ClaimSet")


def normalize_url(url: str) -> str:
    """Comparison key for *url*: fragment dropped, case folded."""
    return url.split("#", 1)[0].casefold()


class ClaimSet:
    """Set of normalized URLs already taken by a crawl.

    :meth:`try_claim` checks and records under one lock, so exactly one of any
    number of concurrent callers wins a given URL, whether they are coroutines
    or threads.
    """

    def __init__(self) -> None:
        self._claimed: Set[str] = set()
        self._lock = threading.Lock()

    def try_claim(self, url: str) -> bool:
        key = normalize_url(url)
        with self._lock:
            if key in self._claimed:
                return False
            self._claimed.add(key)
            return True

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, str):
            return False
        with self._lock:
            return normalize_url(url) in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)
