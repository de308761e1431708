from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Documents are stored with snake_case keys; the JSON API speaks camelCase.


class StoreModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Notes(StoreModel):
    top: list[str] = Field(default_factory=list)
    heart: list[str] = Field(default_factory=list)
    base: list[str] = Field(default_factory=list)


class Product(StoreModel):
    name: str
    brand: str
    price: float = Field(ge=0)
    original_price: Optional[float] = Field(default=None, ge=0)
    description: str
    category: str
    image: str
    rating: float = 4.5
    reviews: int = 0
    in_stock: bool = True
    size: str = "100ml"
    notes: Notes = Field(default_factory=Notes)
    featured: bool = False


class ProductOut(Product):
    id: str


class ProductUpdate(StoreModel):
    """Partial product update; only the fields a caller sends are applied."""
    name: Optional[str] = None
    brand: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    in_stock: Optional[bool] = None
    size: Optional[str] = None
    notes: Optional[Notes] = None
    featured: Optional[bool] = None


class OrderItem(StoreModel):
    # Snapshot of the product at order time; product_id is only a weak link
    product_id: Optional[str] = None
    name: Optional[str] = None
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)


class OrderCreate(StoreModel):
    customer_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    items: list[OrderItem] = Field(default_factory=list)
    total_amount: float = Field(ge=0)


class Order(OrderCreate):
    status: str = "pending"
    order_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class OrderOut(Order):
    id: str


class OrderItemDetail(StoreModel):
    product_id: Optional[ProductOut] = None
    name: Optional[str] = None
    price: float
    quantity: int


class OrderDetail(StoreModel):
    id: str
    customer_name: str
    email: str
    phone: str
    address: str
    items: list[OrderItemDetail]
    total_amount: float
    status: str
    order_date: datetime


class PlaceOrderResponse(StoreModel):
    message: str
    order_id: str


class Stats(StoreModel):
    total_products: int
    total_orders: int
    total_revenue: float


class Health(StoreModel):
    status: str
    message: str


class QuoteItem(StoreModel):
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)


class QuoteRequest(StoreModel):
    items: list[QuoteItem] = Field(default_factory=list)
    promo_code: Optional[str] = None
