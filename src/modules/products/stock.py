"""Stock engine.

Side-effect free aggregation over variant ``stock`` /
``low_stock_threshold`` pairs.  Works on model instances or any object
carrying those two attributes.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol, TypeVar


class Stocked(Protocol):
    stock: int
    low_stock_threshold: int


S = TypeVar("S", bound=Stocked)


def is_low_stock(variant: Stocked) -> bool:
    return variant.stock <= variant.low_stock_threshold


def is_out_of_stock(variant: Stocked) -> bool:
    """Exactly zero; a low-stock variant may still have units left."""
    return variant.stock == 0


def total_stock(variants: Iterable[Stocked]) -> int:
    return sum(variant.stock for variant in variants)


def low_stock_flag(variants: Iterable[Stocked]) -> bool:
    """True when at least one variant is at or below its threshold."""
    return any(is_low_stock(variant) for variant in variants)


def low_stock_variants(variants: Iterable[S]) -> List[S]:
    return [variant for variant in variants if is_low_stock(variant)]


def all_out_of_stock(variants: Iterable[Stocked]) -> bool:
    """True when every variant is at zero.  An empty list is not out of stock."""
    variants = list(variants)
    return bool(variants) and all(is_out_of_stock(v) for v in variants)
