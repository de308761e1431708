from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pydantic_settings import BaseSettings
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from errors import StoreError

logger = logging.getLogger(__name__)

PRODUCTS = "products"
ORDERS = "orders"


class Settings(BaseSettings):
    DATABASE_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "perfume-store"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    SEED_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"


settings = Settings()


def _to_object_id(doc_id: str) -> Optional[ObjectId]:
    # Malformed ids can never match a stored document
    if not ObjectId.is_valid(doc_id):
        return None
    return ObjectId(doc_id)


def _out(doc: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    if doc is not None and "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


class DocumentStore:
    """Handle on the storefront's MongoDB database.

    Construct once at startup, ``open()`` before serving and ``close()`` at
    shutdown. Documents come back as plain dicts with ``_id`` replaced by a
    string ``id``. Driver failures are raised as :class:`StoreError`.
    """

    def __init__(self, url: str, name: str):
        self.url = url
        self.name = name
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "DocumentStore":
        return cls(config.DATABASE_URL, config.DATABASE_NAME)

    async def open(self) -> None:
        if self._db is None:
            self._client = AsyncIOMotorClient(self.url)
            self._db = self._client[self.name]
            logger.info("Connected to MongoDB database %r", self.name)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("Closed MongoDB connection")
        self._client = None
        self._db = None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise StoreError("Document store is not open")
        return self._db

    async def find(self, collection_name: str, filter_dict: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        try:
            cursor = self.db[collection_name].find(filter_dict or {})
            return [_out(d) async for d in cursor]
        except PyMongoError as e:
            raise StoreError(f"Error reading {collection_name}") from e

    async def find_by_id(self, collection_name: str, doc_id: str) -> Optional[dict[str, Any]]:
        oid = _to_object_id(doc_id)
        if oid is None:
            return None
        try:
            return _out(await self.db[collection_name].find_one({"_id": oid}))
        except PyMongoError as e:
            raise StoreError(f"Error reading {collection_name}") from e

    async def insert(self, collection_name: str, data: dict[str, Any]) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        data_with_meta = {**data, "created_at": now, "updated_at": now}
        try:
            result = await self.db[collection_name].insert_one(data_with_meta)
            inserted = await self.db[collection_name].find_one({"_id": result.inserted_id})
        except PyMongoError as e:
            raise StoreError(f"Error writing {collection_name}") from e
        return _out(inserted) or {}

    async def insert_many(self, collection_name: str, docs: list[dict[str, Any]]) -> int:
        now = datetime.now(timezone.utc)
        try:
            result = await self.db[collection_name].insert_many(
                [{**d, "created_at": now, "updated_at": now} for d in docs]
            )
        except PyMongoError as e:
            raise StoreError(f"Error writing {collection_name}") from e
        return len(result.inserted_ids)

    async def update_by_id(self, collection_name: str, doc_id: str, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        oid = _to_object_id(doc_id)
        if oid is None:
            return None
        try:
            updated = await self.db[collection_name].find_one_and_update(
                {"_id": oid},
                {"$set": {**fields, "updated_at": datetime.now(timezone.utc)}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(f"Error updating {collection_name}") from e
        return _out(updated)

    async def count(self, collection_name: str) -> int:
        try:
            return await self.db[collection_name].count_documents({})
        except PyMongoError as e:
            raise StoreError(f"Error counting {collection_name}") from e

    async def sum_field(self, collection_name: str, field: str) -> float:
        pipeline = [{"$group": {"_id": None, "total": {"$sum": f"${field}"}}}]
        try:
            rows = await self.db[collection_name].aggregate(pipeline).to_list(length=1)
        except PyMongoError as e:
            raise StoreError(f"Error aggregating {collection_name}") from e
        return rows[0]["total"] if rows else 0
