# File: site_tree/errors.py
"""site_tree.errors: exception hierarchy shared by the crawler, storage and CLI."""

from __future__ import annotations

__all__ = (
    "SiteTreeError",
    "PageNotFoundError",
    "FetchFailureError",
    "DuplicateKeyError",
    "NamespaceExistsError",
    "NamespaceNotFoundError",
)


class SiteTreeError(Exception):
    """Base class for every error raised by SiteTree."""


class PageNotFoundError(SiteTreeError):
    """The server answered HTTP 404 for a crawled URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"404 error occurred: {url}")
        self.url = url


class FetchFailureError(SiteTreeError):
    """Transport or protocol failure while fetching a page."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class DuplicateKeyError(SiteTreeError):
    """A page record with the same id already exists in the namespace."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Duplicate page id: {node_id}")
        self.node_id = node_id


class NamespaceExistsError(SiteTreeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Namespace '{name}' already exists. Please choose a different name.")
        self.name = name


class NamespaceNotFoundError(SiteTreeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Namespace '{name}' does not exist.")
        self.name = name
