"""Pricing engine.

Pure functions deriving a product's effective price from its base
price and discount configuration.  ``now`` is always passed in, so the
result depends only on the arguments.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol

HUNDRED = Decimal("100")
ZERO = Decimal("0")


class Discountable(Protocol):
    base_price: Decimal
    discount_percentage: Decimal
    discount_start_date: Optional[datetime]
    discount_end_date: Optional[datetime]


def discount_window_open(
    start: Optional[datetime], end: Optional[datetime], now: datetime
) -> bool:
    """Inclusive on both ends; a missing bound is open."""
    if start is not None and now < start:
        return False
    if end is not None and now > end:
        return False
    return True


def apply_discount(base_price: Decimal, percentage: Decimal) -> Decimal:
    """``base_price * (1 - percentage/100)`` with percentage clamped to 0..100."""
    percentage = min(max(Decimal(percentage), ZERO), HUNDRED)
    return Decimal(base_price) * (HUNDRED - percentage) / HUNDRED


def effective_price(product: Discountable, now: datetime) -> Decimal:
    """Discounted price while the discount window is open, else base price."""
    base_price = Decimal(product.base_price)
    percentage = Decimal(product.discount_percentage or 0)
    if percentage <= ZERO:
        return base_price
    if not discount_window_open(
        product.discount_start_date, product.discount_end_date, now
    ):
        return base_price
    return apply_discount(base_price, percentage)
