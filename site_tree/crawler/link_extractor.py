# site_tree/crawler/link_extractor.py
"""
Link and label extraction for SiteTree.

Resolution of ``href`` values is deliberately literal:

* hrefs with a scheme (``http:``, ``https:``, ``mailto:`` ...) are kept as-is;
* root-relative hrefs (``/path``) are appended to the origin of the base URL;
* anything else is concatenated onto the base URL without ``..`` handling.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ("DEFAULT_EXCLUDE", "extract", "extract_label", "extract_links", "resolve_href")

#: in-page anchor marker skipped by default
DEFAULT_EXCLUDE = "#main"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def resolve_href(href: str, base_url: str) -> str:
    """Turn *href* found on *base_url* into an absolute URL."""
    if _SCHEME_RE.match(href):
        return href
    if href.startswith("/"):
        parts = urlsplit(base_url)
        origin = f"{parts.scheme}://{parts.netloc}" if parts.netloc else base_url
        return origin.rstrip("/") + href
    return base_url + href


def _label_from(soup: BeautifulSoup) -> str:
    title = soup.find("title")
    if not isinstance(title, Tag):
        return ""
    return title.get_text().strip()


def _links_from(soup: BeautifulSoup, base_url: str, exclude: Optional[str]) -> List[str]:
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        if exclude and exclude in href:
            continue
        links.append(resolve_href(href.strip(), base_url))
    return links


def extract_label(html: str) -> str:
    """Text of the first ``<title>``, entities decoded; ``""`` when absent."""
    return _label_from(_soup(html))


def extract_links(html: str, base_url: str, exclude: Optional[str] = DEFAULT_EXCLUDE) -> List[str]:
    """Absolute URLs of every ``<a href>`` in document order, duplicates kept."""
    return _links_from(_soup(html), base_url, exclude)


def extract(html: str, base_url: str, exclude: Optional[str] = DEFAULT_EXCLUDE) -> Tuple[str, List[str]]:
    """Parse *html* once and return ``(label, links)``."""
    soup = _soup(html)
    return _label_from(soup), _links_from(soup, base_url, exclude)
