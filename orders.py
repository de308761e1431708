from __future__ import annotations
import logging
from typing import Any, Iterable, Union

from pydantic import ValidationError as SchemaError

from database import ORDERS, PRODUCTS, DocumentStore
from errors import NotFound, ValidationError
from schemas import Order, OrderDetail, OrderItem, ProductOut, Stats

logger = logging.getLogger(__name__)


def _validation_error(exc: SchemaError) -> ValidationError:
    fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
    return ValidationError("Invalid order: " + ", ".join(fields), fields=fields)


class OrderService:
    """Places orders and reads them back.

    The order total is taken as supplied by the caller; it is not checked
    against the items.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def place_order(
        self,
        customer_name: str,
        email: str,
        phone: str,
        address: str,
        items: Iterable[Union[OrderItem, dict[str, Any]]],
        total_amount: float,
    ) -> str:
        try:
            order = Order(
                customer_name=customer_name,
                email=email,
                phone=phone,
                address=address,
                items=[i.model_dump() if isinstance(i, OrderItem) else i for i in items or []],
                total_amount=total_amount,
            )
        except SchemaError as e:
            raise _validation_error(e) from e
        saved = await self.store.insert(ORDERS, order.model_dump())
        logger.info("Placed order %s for %d item(s), total %.2f", saved["id"], len(order.items), order.total_amount)
        return saved["id"]

    async def get_order(self, order_id: str) -> OrderDetail:
        doc = await self.store.find_by_id(ORDERS, order_id)
        if doc is None:
            raise NotFound("Order not found")
        items = []
        for item in doc.get("items", []):
            product = None
            if item.get("product_id"):
                found = await self.store.find_by_id(PRODUCTS, item["product_id"])
                product = ProductOut(**found) if found else None
            items.append({**item, "product_id": product})
        return OrderDetail(**{**doc, "items": items})

    async def stats(self) -> Stats:
        return Stats(
            total_products=await self.store.count(PRODUCTS),
            total_orders=await self.store.count(ORDERS),
            total_revenue=await self.store.sum_field(ORDERS, "total_amount"),
        )
