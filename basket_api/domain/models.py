"""
Domain models for the shopping basket.

These models hold basket state and derive every price from it on read.
Nothing here is cached, so changing an item or the shipping country is
reflected in the next total that is asked for.
"""

import copy
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .errors import ValidationError


VAT_RATE = Decimal("0.20")
UK_SHIPPING_COST = Decimal("5.99")
INTERNATIONAL_SHIPPING_COST = Decimal("15.99")
DOMESTIC_COUNTRY = "UK"

# Bounds that keep every line total well inside the default 28-digit Decimal context
MAX_QUANTITY = 2147483647
MAX_UNIT_PRICE = Decimal("1000000000")

_HUNDRED = Decimal("100")


def new_basket_id() -> str:
    return str(uuid.uuid4())


@dataclass
class BasketItem:
    """A single line in a basket."""
    id: str
    name: str = ""
    unit_price: Decimal = Decimal("0")
    quantity: int = 1
    is_discounted: bool = False
    discount_percentage: Decimal = Decimal("0")  # 0-100, only used when is_discounted

    @property
    def total_price(self) -> Decimal:
        """Unit price times quantity, before any discount."""
        return self.unit_price * self.quantity

    @property
    def total_price_with_discount(self) -> Decimal:
        """Line total after the item's own discount."""
        if not self.is_discounted:
            return self.total_price
        return self.total_price * (1 - self.discount_percentage / _HUNDRED)

    def merge(self, incoming: "BasketItem") -> None:
        """Fold a repeated add of the same item id into this line.

        Quantity accumulates; name, price and discount fields take the
        incoming values.
        """
        self.quantity += incoming.quantity
        self.name = incoming.name
        self.unit_price = incoming.unit_price
        self.is_discounted = incoming.is_discounted
        self.discount_percentage = incoming.discount_percentage


@dataclass(frozen=True)
class DiscountCode:
    """A named percentage discount that applies to the whole basket."""
    code: str
    percentage: Decimal
    is_active: bool = True
    description: str = ""

    def matches(self, code: Optional[str]) -> bool:
        return bool(code) and self.code.lower() == code.lower()


@dataclass
class Basket:
    """Shopping basket domain model and pricing calculator."""
    id: str = field(default_factory=new_basket_id)
    items: List[BasketItem] = field(default_factory=list)
    discount_code: Optional[str] = None
    discount_code_percentage: Decimal = Decimal("0")
    shipping_country: str = DOMESTIC_COUNTRY

    def find_item(self, item_id: str) -> Optional[BasketItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def add_item(self, item: BasketItem) -> BasketItem:
        """Merge into an existing line with the same id, or append a copy."""
        existing = self.find_item(item.id)
        if existing is not None:
            if existing.quantity + item.quantity > MAX_QUANTITY:
                raise ValidationError(
                    {"quantity": [f"Quantity of item {item.id} would exceed {MAX_QUANTITY}"]},
                    "Item quantity limit exceeded",
                )
            existing.merge(item)
            return existing
        line = copy.copy(item)
        self.items.append(line)
        return line

    def remove_item(self, item_id: str) -> bool:
        item = self.find_item(item_id)
        if item is None:
            return False
        self.items.remove(item)
        return True

    def apply_discount(self, discount: DiscountCode) -> None:
        # Code and percentage always change together
        self.discount_code = discount.code
        self.discount_code_percentage = discount.percentage

    def snapshot(self) -> "Basket":
        """Independent copy of the basket for rendering outside its lock."""
        return copy.deepcopy(self)

    @property
    def non_discounted_total(self) -> Decimal:
        return sum((item.total_price for item in self.items if not item.is_discounted), Decimal("0"))

    @property
    def discounted_total(self) -> Decimal:
        return sum((item.total_price_with_discount for item in self.items if item.is_discounted), Decimal("0"))

    @property
    def discount_code_reduction(self) -> Decimal:
        """Basket-level code reduction. Items with their own discount are never reduced again."""
        return self.non_discounted_total * (self.discount_code_percentage / _HUNDRED)

    @property
    def subtotal_excluding_vat(self) -> Decimal:
        return (self.non_discounted_total - self.discount_code_reduction) + self.discounted_total

    @property
    def is_domestic(self) -> bool:
        return (self.shipping_country or "").upper() == DOMESTIC_COUNTRY

    @property
    def shipping_cost(self) -> Decimal:
        return UK_SHIPPING_COST if self.is_domestic else INTERNATIONAL_SHIPPING_COST

    @property
    def vat_amount(self) -> Decimal:
        # VAT is charged on goods only, never on shipping
        return self.subtotal_excluding_vat * VAT_RATE

    @property
    def total_excluding_vat(self) -> Decimal:
        return self.subtotal_excluding_vat + self.shipping_cost

    @property
    def total_including_vat(self) -> Decimal:
        return self.subtotal_excluding_vat + self.vat_amount + self.shipping_cost
