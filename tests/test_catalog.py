"""Tests for catalog queries and product updates, against the in-memory store."""

import asyncio

import pytest

from catalog import CatalogService, matches_query
from errors import NotFound
from schemas import ProductUpdate
from tests.fakes import FakeStore, make_product


def _setup() -> tuple[CatalogService, FakeStore]:
    store = FakeStore([
        make_product(name="Royal OUD", brand="Tihamis", category="oriental", price=1600, featured=True,
                     description="Dark florals and woody notes."),
        make_product(name="Citrus Dream", brand="Fresh Essence", category="fresh", price=64.99, featured=True,
                     description="A refreshing citrus fragrance."),
        make_product(name="Midnight Rose", brand="Fleur de Paris", category="floral"),
        make_product(name="Garden Paradise", brand="Bloom & Co", category="Floral",
                     description="A blooming garden."),
    ])
    return CatalogService(store), store


class TestListing:

    def test_list_all(self):
        catalog, _ = _setup()
        products = asyncio.run(catalog.list_all())
        assert [p.name for p in products] == ["Royal OUD", "Citrus Dream", "Midnight Rose", "Garden Paradise"]

    def test_defaults_are_filled_in(self):
        catalog, _ = _setup()
        product = asyncio.run(catalog.list_all())[2]
        assert product.rating == 4.5
        assert product.reviews == 0
        assert product.in_stock is True
        assert product.size == "100ml"
        assert product.featured is False
        assert product.original_price is None

    def test_featured(self):
        catalog, _ = _setup()
        names = [p.name for p in asyncio.run(catalog.list_featured())]
        assert names == ["Royal OUD", "Citrus Dream"]

    def test_get_by_id(self):
        catalog, store = _setup()
        product_id = store.ids("products")[1]
        product = asyncio.run(catalog.get_by_id(product_id))
        assert product.id == product_id
        assert product.name == "Citrus Dream"

    def test_get_unknown_id(self):
        catalog, _ = _setup()
        with pytest.raises(NotFound, match="Product not found"):
            asyncio.run(catalog.get_by_id("ffffffffffffffffffffffff"))


class TestSearch:

    def test_case_insensitive_name(self):
        catalog, _ = _setup()
        names = [p.name for p in asyncio.run(catalog.search("oud"))]
        assert names == ["Royal OUD"]

    def test_matches_brand(self):
        catalog, _ = _setup()
        names = [p.name for p in asyncio.run(catalog.search("ESSENCE"))]
        assert names == ["Citrus Dream"]

    def test_matches_description_substring(self):
        catalog, _ = _setup()
        names = [p.name for p in asyncio.run(catalog.search("bloom"))]
        assert names == ["Garden Paradise"]

    def test_matches_category(self):
        catalog, _ = _setup()
        names = [p.name for p in asyncio.run(catalog.search("floral"))]
        assert "Midnight Rose" in names
        assert "Garden Paradise" in names

    def test_empty_query_returns_everything(self):
        catalog, _ = _setup()
        assert len(asyncio.run(catalog.search(""))) == 4

    def test_no_match(self):
        catalog, _ = _setup()
        assert asyncio.run(catalog.search("vetiver")) == []

    def test_regex_characters_are_literal(self):
        assert not matches_query(make_product(), ".*")
        assert matches_query(make_product(name="No. 5 (Eau)"), "(eau)")


class TestCategory:

    def test_exact_match_only(self):
        catalog, _ = _setup()
        names = [p.name for p in asyncio.run(catalog.list_by_category("floral"))]
        assert names == ["Midnight Rose"]

    def test_no_partial_match(self):
        catalog, _ = _setup()
        assert asyncio.run(catalog.list_by_category("flo")) == []


class TestUpdate:

    def test_merges_given_fields(self):
        catalog, store = _setup()
        product_id = store.ids("products")[2]
        updated = asyncio.run(catalog.update(product_id, ProductUpdate(price=99.0, in_stock=False)))
        assert updated.price == 99.0
        assert updated.in_stock is False
        assert updated.name == "Midnight Rose"

    def test_update_is_persisted(self):
        catalog, store = _setup()
        product_id = store.ids("products")[0]
        asyncio.run(catalog.update(product_id, ProductUpdate.model_validate({"originalPrice": 2500})))
        assert asyncio.run(catalog.get_by_id(product_id)).original_price == 2500

    def test_empty_values_are_accepted(self):
        catalog, store = _setup()
        product_id = store.ids("products")[0]
        assert asyncio.run(catalog.update(product_id, ProductUpdate(name=""))).name == ""

    def test_empty_update_returns_current(self):
        catalog, store = _setup()
        product_id = store.ids("products")[0]
        assert asyncio.run(catalog.update(product_id, ProductUpdate())).name == "Royal OUD"

    def test_unknown_id(self):
        catalog, _ = _setup()
        with pytest.raises(NotFound):
            asyncio.run(catalog.update("ffffffffffffffffffffffff", ProductUpdate(price=1)))
