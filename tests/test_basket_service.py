"""Tests for basket use-case operations."""
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from basket_api.domain.errors import InvalidDiscountCodeError
from basket_api.domain.models import BasketItem


def _item(item_id="A", price="10.00", quantity=1, discounted=False, percentage="0", name=None):
    return BasketItem(
        id=item_id,
        name=name or f"Item {item_id}",
        unit_price=Decimal(price),
        quantity=quantity,
        is_discounted=discounted,
        discount_percentage=Decimal(percentage),
    )


def test_get_basket_materializes_unknown_ids(service, store):
    basket = service.get_basket("fresh")
    assert basket.id == "fresh"
    assert basket.shipping_country == "UK"
    assert basket.total_including_vat == Decimal("5.99")
    assert "fresh" in store


def test_returned_basket_is_a_snapshot(service, store):
    snapshot = service.add_item("snap", _item("A"))
    snapshot.items.clear()
    assert len(store.get_or_create("snap").items) == 1


def test_add_same_item_twice_gives_one_line(service):
    service.add_item("d", _item("A", quantity=1))
    basket = service.add_item("d", _item("A", quantity=1))
    assert len(basket.items) == 1
    assert basket.items[0].quantity == 2


def test_repeated_add_overwrites_metadata(service):
    service.add_item("meta", _item("A", price="10.00", quantity=2, name="Old"))
    basket = service.add_item("meta", _item("A", price="8.00", quantity=3, name="New", discounted=True, percentage="50"))
    line = basket.items[0]
    assert line.quantity == 5
    assert line.name == "New"
    assert line.unit_price == Decimal("8.00")
    assert line.total_price_with_discount == Decimal("20.00")


def test_add_items_applies_in_order(service):
    basket = service.add_items("bulk", [_item("A"), _item("B"), _item("A", quantity=2)])
    assert [item.id for item in basket.items] == ["A", "B"]
    assert basket.items[0].quantity == 3


def test_remove_item_and_missing_item_is_noop(service):
    service.add_items("rm", [_item("A"), _item("B")])
    basket = service.remove_item("rm", "A")
    assert [item.id for item in basket.items] == ["B"]
    basket = service.remove_item("rm", "does-not-exist")
    assert [item.id for item in basket.items] == ["B"]


def test_apply_discount_code_scenario(service):
    service.add_item("b", _item("A", price="10.00", quantity=2))
    basket = service.apply_discount_code("b", "SAVE10")
    assert basket.discount_code == "SAVE10"
    assert basket.discount_code_percentage == Decimal("10")
    assert basket.total_including_vat == Decimal("27.59")


def test_apply_code_with_different_case_stores_canonical_code(service):
    basket = service.apply_discount_code("case", "summer15")
    assert basket.discount_code == "SUMMER15"


def test_invalid_code_leaves_discount_state_unchanged(service):
    service.apply_discount_code("e", "WELCOME20")
    with pytest.raises(InvalidDiscountCodeError):
        service.apply_discount_code("e", "BOGUS")
    basket = service.get_basket("e")
    assert basket.discount_code == "WELCOME20"
    assert basket.discount_code_percentage == Decimal("20")


def test_invalid_code_on_new_basket_leaves_it_unset(service):
    with pytest.raises(InvalidDiscountCodeError):
        service.apply_discount_code("e2", "BOGUS")
    basket = service.get_basket("e2")
    assert basket.discount_code is None
    assert basket.discount_code_percentage == Decimal("0")


def test_set_shipping_destination_accepts_any_string(service):
    basket = service.set_shipping_destination("ship", "Narnia")
    assert basket.shipping_country == "Narnia"
    assert basket.shipping_cost == Decimal("15.99")
    basket = service.set_shipping_destination("ship", "uk")
    assert basket.shipping_cost == Decimal("5.99")


def test_totals(service):
    service.add_item("t", _item("B", price="50.00", discounted=True, percentage="50"))
    service.apply_discount_code("t", "WELCOME20")
    service.set_shipping_destination("t", "US")
    assert service.total_including_vat("t") == Decimal("45.99")
    assert service.total_excluding_vat("t") == Decimal("40.99")


def test_list_discount_codes_returns_active_codes(service):
    assert [code.code for code in service.list_discount_codes()] == ["SAVE10", "WELCOME20", "SUMMER15"]


def test_concurrent_adds_to_one_basket_are_not_lost(service):
    def add(_):
        service.add_item("busy", _item("A", quantity=1))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(add, range(200)))

    basket = service.get_basket("busy")
    assert len(basket.items) == 1
    assert basket.items[0].quantity == 200
