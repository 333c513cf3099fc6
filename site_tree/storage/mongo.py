# site_tree/storage/mongo.py
"""
MongoDB storage backend.

One collection per crawl namespace inside a single database. Documents use
the node id as ``_id`` so the unique primary index rejects duplicate ids.
pymongo is synchronous, so every call runs in a worker thread via
:func:`asyncio.to_thread`.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import CollectionInvalid
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from site_tree.config import StorageConfig
from site_tree.crawler.models import PageNode
from site_tree.errors import DuplicateKeyError, NamespaceExistsError, NamespaceNotFoundError
from site_tree.storage.base import Backend, PageStore

__all__ = ("MongoPageStore", "MongoBackend", "to_document")

logger = logging.getLogger("SiteTree")


def to_document(node: PageNode) -> Dict[str, Any]:
    """Persisted record with ``id`` stored under MongoDB's ``_id``."""
    record = node.to_record()
    record["_id"] = record.pop("id")
    return record


class MongoPageStore(PageStore):
    def __init__(self, collection: Collection) -> None:
        self.collection = collection
        self.name = collection.name

    async def insert(self, node: PageNode) -> None:
        try:
            await asyncio.to_thread(self.collection.insert_one, to_document(node))
        except MongoDuplicateKeyError as exc:
            raise DuplicateKeyError(node.id) from exc

    async def find_children(self, parent_id: str) -> List[PageNode]:
        docs = await asyncio.to_thread(lambda: list(self.collection.find({"parentId": parent_id})))
        return [PageNode.from_record(d) for d in docs]

    async def list_all(self) -> List[PageNode]:
        docs = await asyncio.to_thread(lambda: list(self.collection.find({})))
        return [PageNode.from_record(d) for d in docs]


class MongoBackend(Backend):
    """Namespaces are collections of ``config.database``."""

    def __init__(self, config: StorageConfig, client: Optional[MongoClient] = None) -> None:
        self.config = config
        self._owns_client = client is None
        self.client: MongoClient = client if client is not None else MongoClient(
            config.uri, serverSelectionTimeoutMS=config.server_selection_timeout_ms
        )
        self.db: Database = self.client[config.database]

    async def create_namespace(self, name: str) -> MongoPageStore:
        try:
            collection = await asyncio.to_thread(self.db.create_collection, name)
        except CollectionInvalid as exc:
            raise NamespaceExistsError(name) from exc
        logger.debug("Created collection %s.%s", self.db.name, name)
        return MongoPageStore(collection)

    async def open_namespace(self, name: str) -> MongoPageStore:
        if not await self.namespace_exists(name):
            raise NamespaceNotFoundError(name)
        return MongoPageStore(self.db[name])

    async def namespace_exists(self, name: str) -> bool:
        return name in await self.list_namespaces()

    async def list_namespaces(self) -> List[str]:
        names = await asyncio.to_thread(self.db.list_collection_names)
        return sorted(names)

    async def drop_namespace(self, name: str) -> None:
        await asyncio.to_thread(self.db.drop_collection, name)
        logger.info("Collection '%s' purged", name)

    async def drop_all(self) -> None:
        await asyncio.to_thread(self.client.drop_database, self.db.name)
        logger.info("Database '%s' purged", self.db.name)

    async def close(self) -> None:
        if self._owns_client:
            self.client.close()
