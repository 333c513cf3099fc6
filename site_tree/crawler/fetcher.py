# site_tree/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per URL, with redirects and a timeout taken from
the session. Failures are reported as exceptions so the caller can tell a
missing page from a broken transport.
"""
from __future__ import annotations

import asyncio
import logging

from aiohttp import ClientError, ClientSession

from site_tree.crawler.models import PageData
from site_tree.errors import FetchFailureError, PageNotFoundError

__all__ = ("Fetcher",)

logger = logging.getLogger("SiteTree")


class Fetcher:
    """Fetches pages through a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, session: ClientSession, follow_redirects: bool = True) -> None:
        self.session = session
        self.follow_redirects = follow_redirects

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its decoded body.

        Raises PageNotFoundError on HTTP 404 and FetchFailureError on any other
        HTTP error status or transport failure (including timeouts).
        """
        try:
            async with self.session.get(url, allow_redirects=self.follow_redirects) as resp:
                status = resp.status
                if status == 404:
                    raise PageNotFoundError(url)
                if status >= 400:
                    raise FetchFailureError(url, f"HTTP {status}")
                if 300 <= status < 400:
                    logger.info("Redirected: %s", url)
                text = await resp.text(errors="replace")
                return PageData(url, text, status)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchFailureError(url, exc) from exc
