"""Reporting service layer.

Read-only aggregations over active, live products.  Counting is pushed
down to the repositories; ``total_items`` and ``total_stock_value`` are
computed here by scanning every active product through the stock
engine.  Repository errors propagate unchanged.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, List

import structlog

from modules.products import stock
from modules.reports.dtos import (
    CategoryCountDTO,
    CategoryRefDTO,
    InventorySummaryDTO,
    LowStockEntryDTO,
    LowStockVariantDTO,
)

if TYPE_CHECKING:
    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.core.pagination import Page
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


def _low_stock_entry(product: Product) -> LowStockEntryDTO:
    category = product.category
    return LowStockEntryDTO(
        product_id=product.id,
        product_name=product.name,
        category=(
            None
            if category.is_deleted
            else CategoryRefDTO(id=category.id, name=category.name)
        ),
        low_stock_variants=[
            LowStockVariantDTO.model_validate(variant)
            for variant in stock.low_stock_variants(product.variants.all())
        ],
    )


class ReportService:
    """Application service for the inventory reports."""

    def __init__(
        self,
        product_repository: IProductRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._products = product_repository
        self._categories = category_repository

    def low_stock_report(self, page: int, limit: int) -> Page[LowStockEntryDTO]:
        """Products with at least one variant at or below its threshold.

        Ordered by each product's lowest variant stock, then creation.
        """
        result = self._products.low_stock(page, limit)
        logger.info(
            "report.low_stock",
            page=page,
            limit=limit,
            total_items=result.total_items,
        )
        return result.map(_low_stock_entry)

    def inventory_summary(self) -> InventorySummaryDTO:
        total_items = 0
        total_value = Decimal("0")
        for product in self._products.iter_active_with_variants():
            variants = list(product.variants.all())
            total_items += stock.total_stock(variants)
            total_value += sum(
                (Decimal(v.price) * v.stock for v in variants), Decimal("0")
            )

        summary = InventorySummaryDTO(
            total_products=self._products.count_active(),
            total_categories=self._categories.count_active(),
            total_items=total_items,
            total_stock_value=total_value.quantize(CENT, rounding=ROUND_HALF_UP),
            low_stock_items=self._products.count_low_stock(),
            out_of_stock_items=self._products.count_out_of_stock(),
        )
        logger.info("report.inventory_summary", **summary.model_dump(mode="json"))
        return summary

    def category_report(self) -> List[CategoryCountDTO]:
        """Active product count per live category; empty categories are omitted."""
        rows = [CategoryCountDTO(**row) for row in self._products.count_by_category()]
        logger.info("report.categories", category_count=len(rows))
        return rows
