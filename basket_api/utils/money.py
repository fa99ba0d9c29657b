"""Presentation helpers for monetary amounts.

The pricing engine keeps full Decimal precision. Rounding happens here,
at the response boundary, and nowhere else.
"""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Optional

CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """Round to 2 decimal places using banker's rounding."""
    return amount.quantize(CENT, rounding=ROUND_HALF_EVEN)


def format_money(amount: Decimal) -> str:
    """Render a rounded amount as a plain decimal string, e.g. '27.59'."""
    return str(round_money(amount))


def format_decimal(value: Optional[Decimal]) -> Optional[str]:
    """Render a non-monetary Decimal (such as a percentage) in plain notation, e.g. '50' or '12.5'."""
    if value is None:
        return None
    return format(value.normalize(), "f")
