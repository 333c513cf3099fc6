# === FILE: site_tree/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from aiohttp import ClientSession, ClientTimeout

from site_tree.config import CrawlerConfig
from site_tree.crawler.claims import ClaimSet
from site_tree.crawler.fetcher import Fetcher
from site_tree.crawler.ids import IdGenerator
from site_tree.crawler.link_extractor import extract
from site_tree.crawler.models import CrawlOutcome, CrawlStats, PageNode
from site_tree.errors import DuplicateKeyError, FetchFailureError, PageNotFoundError
from site_tree.storage.base import PageStore

__all__ = ("TreeCrawler",)


class TreeCrawler:
    """Recursive, depth-bounded, keyword-filtered crawler writing a page tree.

    Every link that passes the keyword filter becomes its own branch; branches
    run concurrently and at most ``config.concurrency`` fetches are in flight.
    Failures stay inside the branch that hit them.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        store: PageStore,
        *,
        claims: Optional[ClaimSet] = None,
        ids: Optional[IdGenerator] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.claims = claims if claims is not None else ClaimSet()
        self.ids = ids if ids is not None else IdGenerator()
        self.session = session
        self._owns_session = session is None
        self.fetcher: Optional[Fetcher] = None
        self.stats = CrawlStats()
        self.logger = logging.getLogger("SiteTree")
        self._slots = asyncio.Semaphore(config.concurrency)
        self._cancelled = asyncio.Event()

    async def __aenter__(self) -> TreeCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.fetch_timeout),
                raise_for_status=False,
            )
        self.fetcher = Fetcher(self.session, follow_redirects=self.config.follow_redirects)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # Cancellation                                                       #
    # ------------------------------------------------------------------ #

    def cancel(self) -> None:
        """Stop starting new branches; fetches already running are left to finish."""
        if not self._cancelled.is_set():
            self.logger.warning("Crawl cancelled, waiting for in-flight fetches")
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    # ------------------------------------------------------------------ #
    # Traversal                                                          #
    # ------------------------------------------------------------------ #

    async def run(self, url: str, max_depth: int, keyword: str = "") -> CrawlStats:
        """Crawl from *url* down to *max_depth* hops below it and return the stats."""
        self._require_session()
        self.logger.info("Crawl started: %s (depth=%d, keyword=%r)", url, max_depth, keyword)
        start = time.monotonic()
        await self._branch(url, max_depth + 1, "", keyword)
        duration = time.monotonic() - start
        self.logger.info(
            "Crawl finished: %d pages in %.2f s (%s)",
            self.stats.pages_stored,
            duration,
            ", ".join(f"{k}={v}" for k, v in self.stats.as_dict().items() if v),
        )
        return self.stats

    async def crawl(self, url: str, depth: int, parent_id: str = "", keyword: str = "") -> None:
        """One branch: claim, fetch, store, then expand the qualifying links."""
        if depth <= 0:
            self.stats.record(CrawlOutcome.DEPTH_EXHAUSTED)
            return
        if self.cancelled:
            self.stats.record(CrawlOutcome.CANCELLED)
            return
        if not self.claims.try_claim(url):
            self.stats.record(CrawlOutcome.DUPLICATE)
            return

        node = await self._visit(url, parent_id)
        if node is None:
            return

        children = [link for link in node.child_links if not keyword or keyword in link]
        if depth - 1 <= 0:
            if children:
                self.stats.record(CrawlOutcome.DEPTH_EXHAUSTED, len(children))
            return
        if self.cancelled:
            self.stats.record(CrawlOutcome.CANCELLED, len(children))
            return
        await asyncio.gather(*(self._branch(link, depth - 1, node.id, keyword) for link in children))

    def _require_session(self) -> None:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized; use 'async with TreeCrawler(...)'")

    async def _visit(self, url: str, parent_id: str) -> Optional[PageNode]:
        self._require_session()

        async with self._slots:
            if self.cancelled:
                self.stats.record(CrawlOutcome.CANCELLED)
                return None
            try:
                page = await self.fetcher.fetch(url)
            except PageNotFoundError:
                self.logger.warning("404 error occurred: %s", url)
                self.stats.record(CrawlOutcome.NOT_FOUND)
                return None
            except FetchFailureError as exc:
                self.logger.warning("%s", exc)
                self.stats.record(CrawlOutcome.FETCH_ERROR)
                return None

        label, links = extract(page.content, url, exclude=self.config.exclude_substring)
        node = PageNode(
            id=self.ids.next_id(),
            parent_id=parent_id,
            url=url,
            label=label,
            child_links=tuple(links),
        )
        try:
            await self.store.insert(node)
        except DuplicateKeyError:
            self.logger.error("Id %s already present in '%s'; branch %s dropped", node.id, self.store.name, url)
            self.stats.record(CrawlOutcome.DUPLICATE_KEY)
            return None

        self.stats.record(CrawlOutcome.STORED)
        self.logger.info(
            "Inserted page %s: %s (%s) parent=%s links=%d",
            node.id, node.label, node.url, node.parent_id or "-", len(node.child_links),
        )
        return node

    async def _branch(self, url: str, depth: int, parent_id: str, keyword: str) -> None:
        try:
            await self.crawl(url, depth, parent_id, keyword)
        except asyncio.CancelledError:
            raise
        except Exception:
            self.logger.exception("Branch %s failed", url)
            self.stats.record(CrawlOutcome.BRANCH_ERROR)
