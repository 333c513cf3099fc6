# site_tree/storage/memory.py
"""In-process storage backend, used by tests and for throwaway crawls."""
from __future__ import annotations

import threading
from typing import Dict, List

from site_tree.crawler.models import PageNode
from site_tree.errors import DuplicateKeyError, NamespaceExistsError, NamespaceNotFoundError
from site_tree.storage.base import Backend, PageStore

__all__ = ("MemoryPageStore", "MemoryBackend")


class MemoryPageStore(PageStore):
    def __init__(self, name: str) -> None:
        self.name = name
        self._nodes: Dict[str, PageNode] = {}
        self._lock = threading.Lock()

    async def insert(self, node: PageNode) -> None:
        with self._lock:
            if node.id in self._nodes:
                raise DuplicateKeyError(node.id)
            self._nodes[node.id] = node

    async def find_children(self, parent_id: str) -> List[PageNode]:
        with self._lock:
            return [n for n in self._nodes.values() if n.parent_id == parent_id]

    async def list_all(self) -> List[PageNode]:
        with self._lock:
            return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)


class MemoryBackend(Backend):
    """Namespaces kept in a dict; survives event loops but not the process."""

    def __init__(self) -> None:
        self._namespaces: Dict[str, MemoryPageStore] = {}
        self._lock = threading.Lock()

    async def create_namespace(self, name: str) -> MemoryPageStore:
        with self._lock:
            if name in self._namespaces:
                raise NamespaceExistsError(name)
            store = self._namespaces[name] = MemoryPageStore(name)
            return store

    async def open_namespace(self, name: str) -> MemoryPageStore:
        with self._lock:
            try:
                return self._namespaces[name]
            except KeyError:
                raise NamespaceNotFoundError(name) from None

    async def namespace_exists(self, name: str) -> bool:
        with self._lock:
            return name in self._namespaces

    async def list_namespaces(self) -> List[str]:
        with self._lock:
            return sorted(self._namespaces)

    async def drop_namespace(self, name: str) -> None:
        with self._lock:
            self._namespaces.pop(name, None)

    async def drop_all(self) -> None:
        with self._lock:
            self._namespaces.clear()
