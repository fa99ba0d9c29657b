# Utils package for the Shopping Basket API

from .money import (
    round_money,
    format_money,
    format_decimal
)

__all__ = [
    'round_money',
    'format_money',
    'format_decimal'
]
