# File: tests/test_engine.py
from collections import Counter

import pytest

from conftest import html_page, make_site
from site_tree.config import CrawlRequest
from site_tree.engine import CrawlEngine
from site_tree.errors import NamespaceExistsError, NamespaceNotFoundError


@pytest.mark.asyncio()
async def test_start_crawl_stores_into_new_namespace(serve, crawler_config, memory_backend):
    base = await serve(make_site({"/": html_page("Root", "/a"), "/a": html_page("A")}))
    engine = CrawlEngine(crawler_config, backend=memory_backend)

    report = await engine.start_crawl(CrawlRequest(url=base + "/", depth=1, namespace="site"))

    assert report.namespace == "site"
    assert report.stats.pages_stored == 2
    assert not report.cancelled
    assert await engine.list_namespaces() == ["site"]
    pages = await engine.load_pages("site")
    assert {p.url for p in pages} == {base + "/", base + "/a"}


@pytest.mark.asyncio()
async def test_namespace_collision_rejected_before_fetch(serve, crawler_config, memory_backend):
    hits: Counter = Counter()
    base = await serve(make_site({"/": html_page("Root")}, hits))
    await memory_backend.create_namespace("taken")
    engine = CrawlEngine(crawler_config, backend=memory_backend)

    with pytest.raises(NamespaceExistsError):
        await engine.start_crawl(CrawlRequest(url=base + "/", depth=1, namespace="taken"))

    assert not hits


@pytest.mark.asyncio()
async def test_crawl_timeout_cancels_remaining_branches(serve, crawler_config, memory_backend):
    hits: Counter = Counter()
    base = await serve(make_site(
        {"/": html_page("Root", "/slow"), "/slow": html_page("Slow", "/next"), "/next": html_page("Next")},
        hits,
        delays={"/slow": 1.0},
    ))
    config = crawler_config.model_copy(update={"crawl_timeout": 0.3})
    engine = CrawlEngine(config, backend=memory_backend)

    report = await engine.start_crawl(CrawlRequest(url=base + "/", depth=3, namespace="t"))

    assert report.cancelled
    assert report.stats.pages_stored == 2
    assert hits["/next"] == 0


@pytest.mark.asyncio()
async def test_purge_operations(crawler_config, memory_backend):
    engine = CrawlEngine(crawler_config, backend=memory_backend)
    for name in ("a", "b", "c"):
        await memory_backend.create_namespace(name)

    await engine.purge_namespace("a")
    assert await engine.list_namespaces() == ["b", "c"]
    with pytest.raises(NamespaceNotFoundError):
        await engine.load_pages("a")

    await engine.purge_database()
    assert await engine.list_namespaces() == []
