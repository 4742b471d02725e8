"""Unit tests for the catalog filter, category index and chip toggle."""

from __future__ import annotations

import random
from decimal import Decimal

import pytest

from labx.catalog.services import (
    FilterQuery,
    Product,
    filter_products,
    list_categories,
    toggle_category,
)


def _product(product_id: int, name: str = "Item", *, description: str = "", category: str = "Misc",
             stock: int = 1) -> Product:
    return Product(
        id=product_id,
        name=name,
        description=description,
        category=category,
        price=Decimal("10"),
        stock=stock,
    )


def test_empty_query_returns_catalog_unchanged(sample_catalog):
    assert filter_products(sample_catalog, FilterQuery()) == sample_catalog
    assert filter_products([], FilterQuery()) == []


def test_blank_text_matches_everything(sample_catalog):
    assert filter_products(sample_catalog, FilterQuery(text="   ")) == sample_catalog


def test_category_only_query_keeps_matching_category(sample_catalog):
    result = filter_products(sample_catalog, FilterQuery(category="Displays"))

    assert [product.name for product in result] == ["Monitor"]
    assert all(product.category == "Displays" for product in result)


def test_text_match_ignores_case():
    mouse = _product(1, "Mouse Gamer")

    assert filter_products([mouse], FilterQuery(text="MOUSE")) == [mouse]
    assert filter_products([mouse], FilterQuery(text="gAmEr")) == [mouse]


def test_description_match_passes_when_name_does_not():
    webcam = _product(1, "Webcam", description="Includes a stereo microphone")

    assert filter_products([webcam], FilterQuery(text="Microphone")) == [webcam]


def test_text_and_category_must_both_hold(sample_catalog):
    result = filter_products(sample_catalog, FilterQuery(text="o", category="Peripherals"))

    assert [product.name for product in result] == ["Mouse", "Keyboard"]
    assert filter_products(sample_catalog, FilterQuery(text="monitor", category="Peripherals")) == []


def test_category_equality_is_case_sensitive(sample_catalog):
    assert filter_products(sample_catalog, FilterQuery(category="peripherals")) == []


def test_unknown_category_yields_empty_result(sample_catalog):
    assert filter_products(sample_catalog, FilterQuery(category="Furniture")) == []


def test_filter_preserves_input_order_for_any_permutation():
    catalog = [_product(index, f"Cable {index}", category="A" if index % 2 else "B") for index in range(12)]
    rng = random.Random(7)

    for _ in range(5):
        shuffled = catalog[:]
        rng.shuffle(shuffled)
        result = filter_products(shuffled, FilterQuery(text="cable", category="A"))
        assert result == [product for product in shuffled if product.category == "A"]


def test_filter_is_repeatable(sample_catalog):
    query = FilterQuery(text="mo")

    assert filter_products(sample_catalog, query) == filter_products(sample_catalog, query)


def test_categories_are_distinct_and_sorted():
    catalog = [_product(1, category="B"), _product(2, category="A"), _product(3, category="A")]

    assert list_categories(catalog) == ["A", "B"]
    assert list_categories([]) == []


def test_blank_categories_are_left_out_of_the_index():
    catalog = [_product(1, category=""), _product(2, category="  "), _product(3, category="Audio")]

    assert list_categories(catalog) == ["Audio"]


def test_toggle_rule():
    assert toggle_category("A", "A") is None
    assert toggle_category("A", "B") == "B"
    assert toggle_category(None, "B") == "B"


def test_end_to_end_scenario(sample_catalog):
    result = filter_products(sample_catalog, FilterQuery(text="", category="Peripherals"))

    assert [product.name for product in result] == ["Mouse", "Keyboard"]
    assert list_categories(sample_catalog) == ["Displays", "Peripherals"]


def test_has_stock_follows_stock():
    assert _product(1, stock=3).has_stock is True
    assert _product(2, stock=0).has_stock is False
    assert _product(2, stock=0).stock_label == "Out of stock"


@pytest.mark.parametrize("stock", [-1, 1.5, True])
def test_invalid_stock_is_rejected(stock):
    with pytest.raises(ValueError):
        _product(1, stock=stock)


def test_non_integer_id_is_rejected():
    with pytest.raises(ValueError):
        _product("7")


def test_price_is_normalized_and_formatted():
    product = Product(id=1, name="Desk", description="", category="Home", price="1234.5", stock=1)

    assert product.price == Decimal("1234.50")
    assert product.to_dict()["price_display"] == "$1,234.50"


def test_query_activity_flag():
    assert FilterQuery().is_active is False
    assert FilterQuery(text="x").is_active is True
    assert FilterQuery(category="A").is_active is True


@pytest.mark.parametrize("price", [float("nan"), float("inf"), "-Infinity", Decimal("NaN")])
def test_non_finite_price_is_rejected(price):
    with pytest.raises(ValueError):
        Product(id=1, name="Desk", description="", category="Home", price=price, stock=1)
