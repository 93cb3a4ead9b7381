"""Report output DTOs.

Immutable pydantic models returned by ``ReportService``.  Views dump
them with ``model_dump(mode="json")``, which renders decimals as
strings and UUIDs as their canonical form.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CategoryRefDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str


class LowStockVariantDTO(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID
    sku: str
    size: str
    color: str
    material: str
    stock: int
    low_stock_threshold: int


class LowStockEntryDTO(BaseModel):
    """One product in the low-stock report, with only its low variants."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    product_name: str
    category: CategoryRefDTO | None
    low_stock_variants: List[LowStockVariantDTO]


class InventorySummaryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_products: int
    total_categories: int
    total_items: int
    total_stock_value: Decimal
    low_stock_items: int
    out_of_stock_items: int


class CategoryCountDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    category_id: UUID
    category_name: str
    product_count: int
