from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.db import models
from django.utils import timezone

from modules.products.models import Product, Variant

pytestmark = pytest.mark.unit


class TestVariantModel:
    def test_sku_stripped_on_save(self, make_product):
        product = make_product(variants=[{"sku": "  tee-s "}])
        assert product.variants.get().sku == "tee-s"

    def test_skus_differing_in_case_coexist(self, make_product):
        make_product(name="Upper", variants=[{"sku": "A1"}])
        make_product(name="Lower", variants=[{"sku": "a1"}])
        assert sorted(Variant.objects.values_list("sku", flat=True)) == ["A1", "a1"]

    def test_default_threshold(self, make_product):
        product = make_product()
        variant = Variant.objects.create(
            product=product, sku="EXTRA", price=Decimal("1.00")
        )
        assert variant.low_stock_threshold == 10
        assert variant.stock == 0
        assert variant.is_out_of_stock is True

    def test_variants_removed_with_hard_delete(self, make_product):
        product = make_product(variants=[{"sku": "C1"}, {"sku": "C2"}])
        models.Model.delete(product)
        assert not Variant.objects.filter(sku__in=["C1", "C2"]).exists()

    def test_variants_kept_with_soft_delete(self, make_product):
        product = make_product(variants=[{"sku": "C1"}, {"sku": "C2"}])
        product.delete()
        assert Variant.objects.filter(sku__in=["C1", "C2"]).count() == 2


class TestProductDerivedValues:
    def test_stock_properties(self, make_product):
        product = make_product(
            variants=[
                {"sku": "D1", "stock": 0},
                {"sku": "D2", "stock": 4, "low_stock_threshold": 5},
            ]
        )
        assert product.total_stock == 4
        assert product.is_low_stock is True
        assert product.is_out_of_stock is False

    def test_effective_price(self, make_product):
        now = timezone.now()
        product = make_product(
            base_price=Decimal("50.00"),
            discount_percentage=Decimal("10"),
            discount_start_date=now - timedelta(days=1),
            discount_end_date=now + timedelta(days=1),
        )
        assert product.effective_price(now) == Decimal("45")
        assert product.effective_price(now + timedelta(days=2)) == Decimal("50.00")

    def test_soft_delete_keeps_row(self, make_product):
        product = make_product()
        product.delete()

        assert Product.objects.filter(pk=product.pk).exists()
        assert not Product.objects.alive().filter(pk=product.pk).exists()
        assert product.is_deleted
