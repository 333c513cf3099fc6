# File: site_tree/storage/__init__.py
"""site_tree.storage: page stores and namespace backends."""

from __future__ import annotations

from site_tree.config import StorageConfig
from site_tree.storage.base import Backend, PageStore
from site_tree.storage.memory import MemoryBackend, MemoryPageStore


def open_backend(config: StorageConfig) -> Backend:
    """Instantiate the backend named by ``config.backend``."""
    if config.backend == "memory":
        return MemoryBackend()
    if config.backend == "mongo":
        from site_tree.storage.mongo import MongoBackend

        return MongoBackend(config)
    raise ValueError(f"Unknown storage backend: {config.backend}")


__all__ = ["Backend", "PageStore", "MemoryBackend", "MemoryPageStore", "open_backend"]
