# site_tree/storage/base.py
"""
Abstract page store and namespace backend.

A *namespace* is the persistence scope of one crawl (a MongoDB collection).
Every method is a coroutine so blocking drivers can run off the event loop.
"""
from __future__ import annotations

import abc
from typing import List

from site_tree.crawler.models import PageNode

__all__ = ("PageStore", "Backend")


class PageStore(abc.ABC):
    """Append-only store of the pages belonging to one namespace."""

    name: str

    @abc.abstractmethod
    async def insert(self, node: PageNode) -> None:
        """Append *node*; raise DuplicateKeyError if its id is taken."""

    @abc.abstractmethod
    async def find_children(self, parent_id: str) -> List[PageNode]:
        """All nodes whose ``parent_id`` equals *parent_id*, in no particular order."""

    @abc.abstractmethod
    async def list_all(self) -> List[PageNode]:
        ...


class Backend(abc.ABC):
    """Namespace management on top of a concrete database."""

    @abc.abstractmethod
    async def create_namespace(self, name: str) -> PageStore:
        """Create *name* atomically; raise NamespaceExistsError when it is taken."""

    @abc.abstractmethod
    async def open_namespace(self, name: str) -> PageStore:
        """Open an existing namespace; raise NamespaceNotFoundError otherwise."""

    @abc.abstractmethod
    async def namespace_exists(self, name: str) -> bool:
        ...

    @abc.abstractmethod
    async def list_namespaces(self) -> List[str]:
        ...

    @abc.abstractmethod
    async def drop_namespace(self, name: str) -> None:
        ...

    @abc.abstractmethod
    async def drop_all(self) -> None:
        """Drop the whole database with every namespace in it."""

    async def close(self) -> None:
        return None

    async def __aenter__(self) -> Backend:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
