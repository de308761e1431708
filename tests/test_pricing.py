"""Unit tests for cart pricing."""

import pytest

from pricing import DEFAULT_PRICING, PricingConfig, PromoRule, find_promo, quote
from schemas import QuoteItem


def _items(*pairs):
    return [QuoteItem(price=price, quantity=qty) for price, qty in pairs]


class TestSubtotalAndTax:

    def test_empty_cart(self):
        q = quote([])
        assert q.subtotal == 0
        assert q.tax == 0
        assert q.shipping == 10
        assert q.total == 10

    def test_subtotal_sums_price_times_quantity(self):
        q = quote(_items((20, 2), (5.5, 3)))
        assert q.subtotal == pytest.approx(56.5)

    def test_tax_is_eight_percent(self):
        q = quote(_items((50, 1)))
        assert q.tax == pytest.approx(4.0)
        assert round(q.tax, 2) == 4.0

    def test_order_of_items_does_not_matter(self):
        items = _items((64.99, 1), (1600, 2), (54.99, 3))
        forward = quote(items, "SAVE20")
        backward = quote(list(reversed(items)), "SAVE20")
        for field in ("subtotal", "tax", "shipping", "discount", "total"):
            assert getattr(forward, field) == pytest.approx(getattr(backward, field))


class TestShipping:

    def test_free_above_threshold(self):
        assert quote(_items((100.01, 1))).shipping == 0

    def test_exactly_threshold_is_not_free(self):
        assert quote(_items((100.00, 1))).shipping == 10

    def test_below_threshold(self):
        assert quote(_items((99.99, 1))).shipping == 10


class TestPromoCodes:

    def test_percentage_code(self):
        q = quote(_items((200, 1)), "SAVE20")
        assert q.discount == pytest.approx(40)
        assert q.promo_code == "SAVE20"

    def test_flat_code(self):
        q = quote(_items((200, 1)), "FIRSTORDER")
        assert q.discount == 15

    def test_code_lookup_ignores_case_and_whitespace(self):
        assert quote(_items((200, 1)), "  welcome ").discount == pytest.approx(10)

    def test_unknown_code_gives_no_discount(self):
        q = quote(_items((200, 1)), "BOGUS")
        assert q.discount == 0
        assert q.promo_code is None

    def test_no_code(self):
        assert quote(_items((200, 1))).discount == 0

    def test_flat_discount_can_make_total_negative(self):
        config = PricingConfig(promo_codes={"HUGE": PromoRule(kind="flat", amount=500)})
        q = quote(_items((10, 1)), "HUGE", config)
        assert q.total == pytest.approx(10 + 0.8 + 10 - 500)
        assert q.total < 0

    def test_find_promo(self):
        assert find_promo("save10") == PromoRule(kind="percentage", amount=10)
        assert find_promo("") is None
        assert find_promo(None) is None

    def test_recognized_codes(self):
        assert set(DEFAULT_PRICING.promo_codes) == {"SAVE10", "SAVE20", "FIRSTORDER", "WELCOME"}

    def test_describe(self):
        assert find_promo("SAVE10").describe() == "10% off"
        assert find_promo("FIRSTORDER").describe() == "$15 off"


class TestWorkedExample:

    def test_two_royal_ouds_and_citrus_dream_with_save10(self):
        q = quote(_items((1600, 2), (64.99, 1)), "SAVE10")
        assert q.subtotal == pytest.approx(3264.99)
        assert q.tax == pytest.approx(261.1992)
        assert q.shipping == 0
        assert q.discount == pytest.approx(326.499)
        assert q.total == pytest.approx(3199.6902)
