"""
Discount code registry.

Built once by the application factory and handed to the basket service.
The registry is read-only after construction.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from ..domain.errors import InvalidDiscountCodeError
from ..domain.models import DiscountCode

logger = logging.getLogger(__name__)


DEFAULT_DISCOUNT_CODES: Tuple[DiscountCode, ...] = (
    DiscountCode(code="SAVE10", percentage=Decimal("10"), description="10% off your order"),
    DiscountCode(code="WELCOME20", percentage=Decimal("20"), description="20% off for new customers"),
    DiscountCode(code="SUMMER15", percentage=Decimal("15"), description="15% summer discount"),
)


class DiscountCodeRegistry:
    """Lookup of discount codes by case-insensitive name."""

    def __init__(self, codes: Iterable[DiscountCode]):
        self._codes: Tuple[DiscountCode, ...] = tuple(codes)

    @classmethod
    def from_seed(cls, inactive_codes: Optional[Iterable[str]] = None) -> "DiscountCodeRegistry":
        """
        Build the registry from the default seed set.

        Args:
            inactive_codes: Code names (any case) to mark inactive

        Returns:
            DiscountCodeRegistry: The seeded registry
        """
        disabled = {code.lower() for code in (inactive_codes or [])}
        codes = []
        for seed in DEFAULT_DISCOUNT_CODES:
            if seed.code.lower() in disabled:
                seed = DiscountCode(
                    code=seed.code,
                    percentage=seed.percentage,
                    is_active=False,
                    description=seed.description,
                )
                logger.info(f"Discount code {seed.code} disabled by configuration")
            codes.append(seed)
        return cls(codes)

    def lookup(self, code: Optional[str]) -> DiscountCode:
        """Return the active code matching `code`, or raise InvalidDiscountCodeError."""
        for discount in self._codes:
            if discount.is_active and discount.matches(code):
                return discount
        raise InvalidDiscountCodeError(code)

    def active_codes(self) -> List[DiscountCode]:
        return [discount for discount in self._codes if discount.is_active]

    def __len__(self) -> int:
        return len(self._codes)
