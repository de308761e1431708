"""Cart pricing: subtotal, tax, shipping, promo discount and total.

Everything here is pure. The same items and promo code always give the same
quote. Values are left unrounded; callers round for display.
"""
from __future__ import annotations
from typing import Iterable, Literal, Optional, Protocol

from pydantic import BaseModel, Field

from schemas import StoreModel


class PricedItem(Protocol):
    price: float
    quantity: int


class PromoRule(BaseModel):
    kind: Literal["percentage", "flat"]
    amount: float = Field(ge=0)

    def discount_for(self, subtotal: float) -> float:
        if self.kind == "percentage":
            return subtotal * self.amount / 100
        return self.amount

    def describe(self) -> str:
        if self.kind == "percentage":
            return f"{self.amount:g}% off"
        return f"${self.amount:g} off"


PROMO_CODES: dict[str, PromoRule] = {
    "SAVE10": PromoRule(kind="percentage", amount=10),
    "SAVE20": PromoRule(kind="percentage", amount=20),
    "FIRSTORDER": PromoRule(kind="flat", amount=15),
    "WELCOME": PromoRule(kind="percentage", amount=5),
}


class PricingConfig(BaseModel):
    tax_rate: float = 0.08
    # Shipping is free only when the subtotal is strictly above this
    free_shipping_threshold: float = 100.0
    shipping_fee: float = 10.0
    promo_codes: dict[str, PromoRule] = Field(default_factory=lambda: dict(PROMO_CODES))


DEFAULT_PRICING = PricingConfig()


class Quote(StoreModel):
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float
    promo_code: Optional[str] = None


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def find_promo(code: Optional[str], config: PricingConfig = DEFAULT_PRICING) -> Optional[PromoRule]:
    """Look up a promo code, ignoring case and surrounding whitespace."""
    return config.promo_codes.get(normalize_code(code))


def subtotal_of(items: Iterable[PricedItem]) -> float:
    return sum(item.price * item.quantity for item in items)


def shipping_for(subtotal: float, config: PricingConfig = DEFAULT_PRICING) -> float:
    return 0.0 if subtotal > config.free_shipping_threshold else config.shipping_fee


def quote(
    items: Iterable[PricedItem],
    promo_code: Optional[str] = None,
    config: PricingConfig = DEFAULT_PRICING,
) -> Quote:
    """Price a cart.

    An unknown or empty promo code yields no discount. The total is not
    clamped, so a flat discount larger than the rest of the bill gives a
    negative total.
    """
    subtotal = subtotal_of(items)
    tax = subtotal * config.tax_rate
    shipping = shipping_for(subtotal, config)
    rule = find_promo(promo_code, config)
    discount = rule.discount_for(subtotal) if rule else 0.0
    return Quote(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        discount=discount,
        total=subtotal + tax + shipping - discount,
        promo_code=normalize_code(promo_code) if rule else None,
    )
