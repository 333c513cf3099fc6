# site_tree/crawler/__init__.py
"""Crawl traversal engine: extraction, dedup, ids, fetching and orchestration."""
from site_tree.crawler.claims import ClaimSet, normalize_url
from site_tree.crawler.crawler import TreeCrawler
from site_tree.crawler.ids import IdGenerator
from site_tree.crawler.link_extractor import extract
from site_tree.crawler.models import CrawlOutcome, CrawlStats, PageData, PageNode

__all__ = (
    "ClaimSet",
    "normalize_url",
    "TreeCrawler",
    "IdGenerator",
    "extract",
    "CrawlOutcome",
    "CrawlStats",
    "PageData",
    "PageNode",
)
