"""
Basket use-case orchestration.

Every operation runs under the target basket's lock and returns a
snapshot taken before the lock is released, so callers can render a
consistent summary while other requests keep mutating the live basket.
"""

import logging
from decimal import Decimal
from typing import Iterable, List

from ..domain.models import Basket, BasketItem, DiscountCode
from .basket_store import BasketStore
from .discount_registry import DiscountCodeRegistry

logger = logging.getLogger(__name__)


class BasketService:
    """Service for basket operations backed by an in-memory store."""

    def __init__(self, store: BasketStore, discount_codes: DiscountCodeRegistry):
        self.store = store
        self.discount_codes = discount_codes

    def get_basket(self, basket_id: str) -> Basket:
        """Get a basket by id, creating an empty one on first reference."""
        with self.store.locked(basket_id) as basket:
            return basket.snapshot()

    def add_item(self, basket_id: str, item: BasketItem) -> Basket:
        """
        Add a single item to a basket.

        Adding an id that is already in the basket increases its quantity
        and replaces its name, price and discount fields.
        """
        with self.store.locked(basket_id) as basket:
            self._add_item(basket, item)
            return basket.snapshot()

    def add_items(self, basket_id: str, items: Iterable[BasketItem]) -> Basket:
        """Add several items in order. Items already applied stay applied if a later one fails."""
        with self.store.locked(basket_id) as basket:
            for item in items:
                self._add_item(basket, item)
            return basket.snapshot()

    def _add_item(self, basket: Basket, item: BasketItem) -> None:
        merged = basket.find_item(item.id) is not None
        line = basket.add_item(item)
        if merged:
            logger.info(f"Basket {basket.id}: item {item.id} quantity now {line.quantity}")
        else:
            logger.info(f"Basket {basket.id}: added item {item.id} x{item.quantity}")

    def remove_item(self, basket_id: str, item_id: str) -> Basket:
        """Remove an item from a basket. Unknown item ids are ignored."""
        with self.store.locked(basket_id) as basket:
            if basket.remove_item(item_id):
                logger.info(f"Basket {basket_id}: removed item {item_id}")
            else:
                logger.debug(f"Basket {basket_id}: item {item_id} not present, nothing removed")
            return basket.snapshot()

    def apply_discount_code(self, basket_id: str, code: str) -> Basket:
        """
        Apply a discount code to a basket.

        Raises:
            InvalidDiscountCodeError: The code is unknown or inactive. The
                basket's discount state is left as it was.
        """
        with self.store.locked(basket_id) as basket:
            discount = self.discount_codes.lookup(code)
            basket.apply_discount(discount)
            logger.info(f"Basket {basket_id}: applied discount code {discount.code} ({discount.percentage}%)")
            return basket.snapshot()

    def set_shipping_destination(self, basket_id: str, country: str) -> Basket:
        """Set the shipping country. Anything other than UK ships internationally."""
        with self.store.locked(basket_id) as basket:
            basket.shipping_country = country
            logger.info(f"Basket {basket_id}: shipping destination set to {country}")
            return basket.snapshot()

    def list_discount_codes(self) -> List[DiscountCode]:
        return self.discount_codes.active_codes()

    def total_including_vat(self, basket_id: str) -> Decimal:
        with self.store.locked(basket_id) as basket:
            return basket.total_including_vat

    def total_excluding_vat(self, basket_id: str) -> Decimal:
        with self.store.locked(basket_id) as basket:
            return basket.total_excluding_vat
