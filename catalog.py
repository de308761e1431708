from __future__ import annotations
import logging
from typing import Any

from database import PRODUCTS, DocumentStore
from errors import NotFound
from schemas import ProductOut, ProductUpdate

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "brand", "description", "category")


def matches_query(doc: dict[str, Any], query: str) -> bool:
    """Case-insensitive substring match over the searchable product fields."""
    needle = query.casefold()
    return any(needle in str(doc.get(f) or "").casefold() for f in SEARCH_FIELDS)


class CatalogService:
    """Read queries and updates over the product collection."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_all(self) -> list[ProductOut]:
        docs = await self.store.find(PRODUCTS)
        return [ProductOut(**d) for d in docs]

    async def get_by_id(self, product_id: str) -> ProductOut:
        doc = await self.store.find_by_id(PRODUCTS, product_id)
        if doc is None:
            raise NotFound("Product not found")
        return ProductOut(**doc)

    async def list_featured(self) -> list[ProductOut]:
        docs = await self.store.find(PRODUCTS, {"featured": True})
        return [ProductOut(**d) for d in docs]

    async def search(self, query: str) -> list[ProductOut]:
        docs = await self.store.find(PRODUCTS)
        return [ProductOut(**d) for d in docs if matches_query(d, query)]

    async def list_by_category(self, category: str) -> list[ProductOut]:
        docs = await self.store.find(PRODUCTS, {"category": category})
        return [ProductOut(**d) for d in docs]

    async def update(self, product_id: str, changes: ProductUpdate) -> ProductOut:
        fields = changes.model_dump(exclude_unset=True, exclude_none=True)
        if not fields:
            return await self.get_by_id(product_id)
        doc = await self.store.update_by_id(PRODUCTS, product_id, fields)
        if doc is None:
            raise NotFound("Product not found")
        logger.info("Updated product %s fields=%s", product_id, sorted(fields))
        return ProductOut(**doc)
