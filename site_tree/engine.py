# File: site_tree/engine.py
"""site_tree.engine: orchestration layer between the CLI and the crawler/storage."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import List, Optional

from aiohttp import ClientSession

from site_tree.config import CrawlerConfig, CrawlRequest
from site_tree.crawler.crawler import TreeCrawler
from site_tree.crawler.models import CrawlStats, PageNode
from site_tree.logger import logger
from site_tree.storage import Backend, open_backend

__all__ = ["CrawlEngine", "CrawlReport"]


@dataclass(slots=True)
class CrawlReport:
    """Summary of one finished crawl."""

    namespace: str
    url: str
    depth: int
    keyword: str
    stats: CrawlStats
    duration: float
    cancelled: bool = False


class CrawlEngine:
    """Facade for the CLI and tests: namespace checks, crawl runs and tree loading."""

    def __init__(self, config: CrawlerConfig, backend: Optional[Backend] = None) -> None:
        self.config = config
        self.backend = backend if backend is not None else open_backend(config.storage)

    async def start_crawl(self, request: CrawlRequest, *, session: Optional[ClientSession] = None) -> CrawlReport:
        """Create the namespace, then crawl into it.

        The namespace is created before the first fetch, so a name collision
        raises NamespaceExistsError without touching the network.
        """
        store = await self.backend.create_namespace(request.namespace)
        logger.info("Crawling %s into namespace '%s'", request.url, request.namespace)

        start = time.monotonic()
        async with TreeCrawler(self.config, store, session=session) as crawler:
            timer = None
            if self.config.crawl_timeout:
                timer = asyncio.get_running_loop().call_later(self.config.crawl_timeout, crawler.cancel)
            try:
                stats = await crawler.run(request.url, request.depth, request.keyword)
            finally:
                if timer is not None:
                    timer.cancel()

        return CrawlReport(
            namespace=request.namespace,
            url=request.url,
            depth=request.depth,
            keyword=request.keyword,
            stats=stats,
            duration=time.monotonic() - start,
            cancelled=crawler.cancelled,
        )

    async def load_pages(self, namespace: str) -> List[PageNode]:
        store = await self.backend.open_namespace(namespace)
        return await store.list_all()

    async def list_namespaces(self) -> List[str]:
        return await self.backend.list_namespaces()

    async def purge_namespace(self, namespace: str) -> None:
        """Drop one namespace. Must not run while a crawl writes into it."""
        await self.backend.drop_namespace(namespace)

    async def purge_database(self) -> None:
        """Drop every namespace. Must not run while a crawl is active."""
        await self.backend.drop_all()

    async def close(self) -> None:
        await self.backend.close()
