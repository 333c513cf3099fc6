# site_tree/crawler/models.py
"""
Data models for the SiteTree crawler.
"""
from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple


@dataclass(slots=True)
class PageData:
    """Holds the fetched URL, decoded body and HTTP status of one response."""

    url: str
    content: str
    status: int = 200


@dataclass(frozen=True, slots=True)
class PageNode:
    """One crawled page, linked to the page it was discovered on through ``parent_id``."""

    id: str
    parent_id: str
    url: str
    label: str = ""
    child_links: Tuple[str, ...] = ()

    @property
    def is_root(self) -> bool:
        return not self.parent_id

    def to_record(self) -> Dict[str, Any]:
        """Persisted record format."""
        return {
            "id": self.id,
            "parentId": self.parent_id,
            "url": self.url,
            "label": self.label,
            "childLinks": list(self.child_links),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> PageNode:
        """Build a node from a persisted record; MongoDB's ``_id`` is accepted for ``id``."""
        node_id = record["id"] if "id" in record else record["_id"]
        return cls(
            id=str(node_id),
            parent_id=str(record.get("parentId") or ""),
            url=str(record["url"]),
            label=str(record.get("label") or ""),
            child_links=tuple(record.get("childLinks") or ()),
        )


class CrawlOutcome(str, enum.Enum):
    """Terminal state reached by one branch of a crawl."""

    STORED = "stored"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    FETCH_ERROR = "fetch_error"
    DEPTH_EXHAUSTED = "depth_exhausted"
    DUPLICATE_KEY = "duplicate_key"
    CANCELLED = "cancelled"
    BRANCH_ERROR = "branch_error"


@dataclass(slots=True)
class CrawlStats:
    """Outcome counters collected during a crawl for the summary output."""

    outcomes: Counter = field(default_factory=Counter)

    def record(self, outcome: CrawlOutcome, count: int = 1) -> None:
        self.outcomes[outcome] += count

    def __getitem__(self, outcome: CrawlOutcome) -> int:
        return self.outcomes[outcome]

    @property
    def pages_stored(self) -> int:
        return self.outcomes[CrawlOutcome.STORED]

    def as_dict(self) -> Dict[str, int]:
        return {outcome.value: self.outcomes[outcome] for outcome in CrawlOutcome}
