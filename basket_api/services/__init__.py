"""
Basket Services Package

- BasketStore: thread-safe in-memory basket map with per-basket locks
- DiscountCodeRegistry: read-only discount code lookup
- BasketService: use-case operations over the store and registry
"""

from .basket_store import BasketStore
from .discount_registry import DEFAULT_DISCOUNT_CODES, DiscountCodeRegistry
from .basket_service import BasketService

__all__ = [
    'BasketStore',
    'DiscountCodeRegistry',
    'DEFAULT_DISCOUNT_CODES',
    'BasketService',
]
