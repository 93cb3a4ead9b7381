"""Unit tests for ReportService with mocked repositories."""

from __future__ import annotations

import uuid
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from modules.core.pagination import Page
from modules.reports.services import ReportService

pytestmark = pytest.mark.unit


def _variants(*rows):
    items = [
        SimpleNamespace(
            id=uuid.uuid4(),
            sku=sku,
            size="",
            color="",
            material="",
            stock=stock,
            low_stock_threshold=threshold,
            price=Decimal(price),
        )
        for sku, stock, threshold, price in rows
    ]
    return MagicMock(all=MagicMock(return_value=items))


def _product(name, *rows, category_deleted=False):
    return SimpleNamespace(
        id=uuid.uuid4(),
        name=name,
        category=SimpleNamespace(
            id=uuid.uuid4(), name="Apparel", is_deleted=category_deleted
        ),
        variants=_variants(*rows),
    )


@pytest.fixture()
def product_repo():
    return MagicMock()


@pytest.fixture()
def category_repo():
    repo = MagicMock()
    repo.count_active.return_value = 2
    return repo


@pytest.fixture()
def service(product_repo, category_repo):
    return ReportService(product_repository=product_repo, category_repository=category_repo)


class TestLowStockReport:
    def test_keeps_only_low_variants(self, service, product_repo):
        product_a = _product("A", ("A1", 2, 5, "1"), ("A2", 20, 5, "1"))
        product_repo.low_stock.return_value = Page(
            items=[product_a], total_items=1, page=1, limit=10
        )

        page = service.low_stock_report(1, 10)

        entry = page.items[0]
        assert entry.product_name == "A"
        assert [v.sku for v in entry.low_stock_variants] == ["A1"]
        assert page.total_items == 1
        product_repo.low_stock.assert_called_once_with(1, 10)

    def test_deleted_category_rendered_as_none(self, service, product_repo):
        product = _product("A", ("A1", 0, 5, "1"), category_deleted=True)
        product_repo.low_stock.return_value = Page(
            items=[product], total_items=1, page=1, limit=10
        )

        assert service.low_stock_report(1, 10).items[0].category is None

    def test_empty(self, service, product_repo):
        product_repo.low_stock.return_value = Page(items=[], total_items=0, page=1, limit=10)
        page = service.low_stock_report(1, 10)
        assert page.items == []
        assert page.total_pages == 0


class TestInventorySummary:
    def test_totals(self, service, product_repo):
        product_repo.iter_active_with_variants.return_value = iter(
            [
                _product("A", ("A1", 2, 5, "10.00"), ("A2", 3, 5, "5.00")),
                _product("B", ("B1", 0, 5, "20.00")),
            ]
        )
        product_repo.count_active.return_value = 2
        product_repo.count_low_stock.return_value = 2
        product_repo.count_out_of_stock.return_value = 1

        summary = service.inventory_summary()

        assert summary.total_items == 5
        assert summary.total_stock_value == Decimal("35.00")
        assert summary.total_products == 2
        assert summary.total_categories == 2
        assert summary.low_stock_items == 2
        assert summary.out_of_stock_items == 1

    def test_value_rounded_half_up(self, service, product_repo):
        product_repo.iter_active_with_variants.return_value = iter(
            [_product("A", ("A1", 1, 0, "0.005"))]
        )
        product_repo.count_active.return_value = 1
        product_repo.count_low_stock.return_value = 0
        product_repo.count_out_of_stock.return_value = 0

        assert service.inventory_summary().total_stock_value == Decimal("0.01")

    def test_empty_catalog(self, service, product_repo, category_repo):
        product_repo.iter_active_with_variants.return_value = iter([])
        product_repo.count_active.return_value = 0
        product_repo.count_low_stock.return_value = 0
        product_repo.count_out_of_stock.return_value = 0
        category_repo.count_active.return_value = 0

        summary = service.inventory_summary()
        assert summary.total_items == 0
        assert summary.total_stock_value == Decimal("0.00")


class TestCategoryReport:
    def test_maps_rows(self, service, product_repo):
        category_id = uuid.uuid4()
        product_repo.count_by_category.return_value = [
            {"category_id": category_id, "category_name": "Apparel", "product_count": 3}
        ]

        rows = service.category_report()

        assert rows[0].category_id == category_id
        assert rows[0].product_count == 3

    def test_store_errors_propagate(self, service, product_repo):
        product_repo.count_by_category.side_effect = RuntimeError("db down")
        with pytest.raises(RuntimeError):
            service.category_report()
