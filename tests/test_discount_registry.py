"""Tests for the discount code registry."""
from decimal import Decimal

import pytest

from basket_api.domain.errors import InvalidDiscountCodeError
from basket_api.domain.models import DiscountCode
from basket_api.services import DEFAULT_DISCOUNT_CODES, DiscountCodeRegistry


def test_seed_registry_lists_codes_in_order():
    registry = DiscountCodeRegistry.from_seed()
    assert [code.code for code in registry.active_codes()] == ["SAVE10", "WELCOME20", "SUMMER15"]
    assert len(registry) == len(DEFAULT_DISCOUNT_CODES)


def test_lookup_is_case_insensitive():
    registry = DiscountCodeRegistry.from_seed()
    discount = registry.lookup("welcome20")
    assert discount.code == "WELCOME20"
    assert discount.percentage == Decimal("20")


@pytest.mark.parametrize("code", ["BOGUS", "", None, "SAVE10 "])
def test_lookup_rejects_unknown_codes(code):
    registry = DiscountCodeRegistry.from_seed()
    with pytest.raises(InvalidDiscountCodeError) as exc_info:
        registry.lookup(code)
    assert exc_info.value.code == code
    assert exc_info.value.message == "Invalid or inactive discount code"


def test_inactive_codes_are_hidden_and_rejected():
    registry = DiscountCodeRegistry.from_seed(inactive_codes=["summer15"])
    assert [code.code for code in registry.active_codes()] == ["SAVE10", "WELCOME20"]
    with pytest.raises(InvalidDiscountCodeError):
        registry.lookup("SUMMER15")
    # The seed set itself is untouched
    assert all(code.is_active for code in DEFAULT_DISCOUNT_CODES)


def test_registry_accepts_explicit_codes():
    registry = DiscountCodeRegistry([
        DiscountCode(code="STAFF", percentage=Decimal("30"), description="Staff discount"),
        DiscountCode(code="OLD", percentage=Decimal("5"), is_active=False),
    ])
    assert registry.lookup("staff").percentage == Decimal("30")
    assert [code.code for code in registry.active_codes()] == ["STAFF"]
