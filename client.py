"""HTTP client for the storefront API, used by the cart on the shopping side."""
from __future__ import annotations
import logging
from typing import Any, Iterable, Optional
from urllib.parse import quote

import httpx

from schemas import OrderDetail, OrderItem, PlaceOrderResponse, ProductOut, Stats

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"


def _segment(value: str) -> str:
    # Path segments carry user text; "/", "?" and "#" must not split the URL
    return quote(value, safe="")


def filter_products(products: Iterable[ProductOut], query: str = "", category: str = "all") -> list[ProductOut]:
    """Narrow an already fetched product list by category and search text.

    ``category == "all"`` disables the category filter. The text is matched
    case-insensitively against name, brand and description.
    """
    result = list(products)
    if category != "all":
        result = [p for p in result if p.category == category]
    if query:
        needle = query.casefold()
        result = [
            p for p in result
            if needle in p.name.casefold() or needle in p.brand.casefold() or needle in p.description.casefold()
        ]
    return result


class StorefrontClient:
    """Thin wrapper over the JSON API. Failed calls raise and are not retried."""

    def __init__(self, base_url: str = DEFAULT_API_URL, http: Optional[httpx.Client] = None):
        self.http = http or httpx.Client(base_url=base_url)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "StorefrontClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self, path: str) -> Any:
        response = self.http.get(path)
        response.raise_for_status()
        return response.json()

    def list_products(self) -> list[ProductOut]:
        return [ProductOut(**p) for p in self._get("/products")]

    def get_product(self, product_id: str) -> ProductOut:
        return ProductOut(**self._get(f"/products/{_segment(product_id)}"))

    def featured(self) -> list[ProductOut]:
        return [ProductOut(**p) for p in self._get("/products/featured/all")]

    def search(self, query: str) -> list[ProductOut]:
        return [ProductOut(**p) for p in self._get(f"/products/search/{_segment(query)}")]

    def by_category(self, category: str) -> list[ProductOut]:
        return [ProductOut(**p) for p in self._get(f"/products/category/{_segment(category)}")]

    def place_order(
        self,
        customer_name: str,
        email: str,
        phone: str,
        address: str,
        items: list[OrderItem],
        total_amount: float,
    ) -> str:
        payload = {
            "customerName": customer_name,
            "email": email,
            "phone": phone,
            "address": address,
            "items": [i.model_dump(by_alias=True) for i in items],
            "totalAmount": total_amount,
        }
        response = self.http.post("/orders", json=payload)
        if response.is_error:
            logger.warning("Placing order failed with %s: %s", response.status_code, response.text)
        response.raise_for_status()
        return PlaceOrderResponse(**response.json()).order_id

    def get_order(self, order_id: str) -> OrderDetail:
        return OrderDetail(**self._get(f"/orders/{_segment(order_id)}"))

    def stats(self) -> Stats:
        return Stats(**self._get("/stats"))

    def health(self) -> dict:
        return self._get("/health")
