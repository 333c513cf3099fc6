# File: tests/conftest.py
import asyncio
from collections import Counter
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from site_tree.config import CrawlerConfig, StorageConfig
from site_tree.crawler.models import PageNode
from site_tree.logger import configure
from site_tree.storage.memory import MemoryBackend, MemoryPageStore


def html_page(title: str, *hrefs: str) -> str:
    """Small HTML document with a title and one anchor per href."""
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><head><title>{title}</title></head><body>{anchors}</body></html>"


def make_site(
    pages: Dict[str, str],
    hits: Optional[Counter] = None,
    delays: Optional[Dict[str, float]] = None,
    handlers: Optional[Dict[str, Callable]] = None,
) -> web.Application:
    """aiohttp app serving *pages* (path -> HTML); every other path is 404.

    Request counts per path are written into *hits* when given. *handlers*
    (path -> aiohttp handler) are routed before the static pages.
    """
    hits = hits if hits is not None else Counter()
    delays = delays or {}
    app = web.Application()
    for path, handler in (handlers or {}).items():
        app.router.add_get(path, handler)

    async def handle(request: web.Request) -> web.Response:
        path = request.path
        hits[path] += 1
        if path in delays:
            await asyncio.sleep(delays[path])
        if path not in pages:
            raise web.HTTPNotFound()
        return web.Response(text=pages[path], content_type="text/html")

    app.router.add_get("/{tail:.*}", handle)
    return app


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start apps on free local ports, yield a starter returning the base URL, clean up."""
    runners = []

    async def _start(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _start

    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def crawler_config() -> CrawlerConfig:
    """Fast, memory-backed configuration for crawler tests."""
    return CrawlerConfig(
        max_depth=2,
        fetch_timeout=2.0,
        concurrency=5,
        storage=StorageConfig(backend="memory"),
    )


@pytest.fixture()
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture()
def store() -> MemoryPageStore:
    return MemoryPageStore("test")


@pytest.fixture()
def sample_nodes() -> list[PageNode]:
    """A three-level tree: 1 -> (2 -> 4), 3."""
    return [
        PageNode("1", "", "http://example.com/", "Home", ("http://example.com/a", "http://example.com/b")),
        PageNode("2", "1", "http://example.com/a", "A", ("http://example.com/a/x",)),
        PageNode("3", "1", "http://example.com/b", "B"),
        PageNode("4", "2", "http://example.com/a/x", "AX"),
    ]


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI tests point the project logger at CliRunner's stream; restore it afterwards."""
    yield
    configure(level="INFO")
