"""Shopping cart kept on the client.

The cart lives in a small JSON key/value file standing in for browser local
storage. Every change rewrites the whole cart immediately; whatever was
written last wins.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, TypeAdapter
from pydantic import ValidationError as SchemaError

import pricing
from client import StorefrontClient
from errors import ValidationError
from schemas import OrderItem, ProductOut, StoreModel

logger = logging.getLogger(__name__)

CART_KEY = "perfume-cart"


class CartLine(StoreModel):
    product: ProductOut
    quantity: int = Field(ge=1)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def price(self) -> float:
        return self.product.price


_lines_adapter = TypeAdapter(list[CartLine])


class LocalStorage:
    """String values keyed by name, persisted to a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt local storage file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed local storage file %s", self.path)
            return {}
        return data

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self.path.write_text(json.dumps(data), encoding="utf-8")


class CartController:
    """Holds the cart for a shopping session and drives pricing and checkout."""

    def __init__(self, storage: LocalStorage, config: pricing.PricingConfig = pricing.DEFAULT_PRICING):
        self.storage = storage
        self.config = config
        self.lines: list[CartLine] = []
        self.applied_promo: Optional[str] = None
        self.load()

    def load(self) -> None:
        saved = self.storage.get_item(CART_KEY)
        if not saved:
            return
        try:
            self.lines = _lines_adapter.validate_json(saved)
        except SchemaError:
            logger.warning("Discarding unreadable saved cart")
            self.lines = []

    def _save(self) -> None:
        self.storage.set_item(CART_KEY, _lines_adapter.dump_json(self.lines, by_alias=True).decode())

    def _find(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.product_id == product_id), None)

    def add(self, product: ProductOut, quantity: int = 1) -> None:
        """Add units of a product; a merged quantity below 1 drops the line."""
        line = self._find(product.id)
        if line is None and quantity < 1:
            raise ValidationError("Quantity must be at least 1", fields=["quantity"])
        if line is not None:
            if line.quantity + quantity < 1:
                self.remove(product.id)
                return
            line.quantity += quantity
        else:
            self.lines.append(CartLine(product=product, quantity=quantity))
        self._save()
        logger.debug("%s added to cart", product.name)

    def remove(self, product_id: str) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]
        self._save()

    def set_quantity(self, product_id: str, quantity: int) -> None:
        if quantity < 1:
            self.remove(product_id)
            return
        line = self._find(product_id)
        if line is not None:
            line.quantity = quantity
        self._save()

    def clear(self) -> None:
        self.lines = []
        self._save()

    def count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def subtotal(self) -> float:
        return pricing.subtotal_of(self.lines)

    def apply_promo(self, code: str) -> bool:
        """Apply a promo code. An unknown code drops any promo applied before."""
        if pricing.find_promo(code, self.config) is None:
            self.applied_promo = None
            return False
        self.applied_promo = pricing.normalize_code(code)
        return True

    def quote(self) -> pricing.Quote:
        return pricing.quote(self.lines, self.applied_promo, self.config)

    def order_items(self) -> list[OrderItem]:
        return [
            OrderItem(product_id=line.product_id, name=line.product.name, price=line.price, quantity=line.quantity)
            for line in self.lines
        ]

    def checkout(
        self,
        client: StorefrontClient,
        customer_name: str,
        email: str,
        phone: str,
        address: str,
        city: str,
        zip_code: str,
    ) -> str:
        """Place an order for the current cart and empty it on success.

        An empty cart or a negative total is refused before anything is sent.
        """
        if not self.lines:
            raise ValidationError("Cart is empty", fields=["items"])
        total = round(self.quote().total, 2)
        if total < 0:
            raise ValidationError("Order total cannot be negative", fields=["totalAmount"])
        order_id = client.place_order(
            customer_name=customer_name,
            email=email,
            phone=phone,
            address=f"{address}, {city}, {zip_code}",
            items=self.order_items(),
            total_amount=total,
        )
        self.applied_promo = None
        self.clear()
        return order_id
