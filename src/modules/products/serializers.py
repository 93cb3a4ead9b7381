"""Product DRF serializers (output only).

Input is validated by the pydantic DTOs in ``dtos.py``.  Derived fields
(``discounted_price``, ``total_stock``, ``is_low_stock``,
``is_out_of_stock``) are computed on every render through the ``Product``
members that wrap the pricing and stock engines.  The render instant comes
from ``context["now"]`` so one response uses a single clock reading.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone
from rest_framework import serializers

from modules.categories.serializers import CategorySummarySerializer
from modules.products.models import Product, Variant

CENT = Decimal("0.01")


class VariantSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)
    is_out_of_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            "id",
            "size",
            "color",
            "material",
            "sku",
            "price",
            "stock",
            "low_stock_threshold",
            "is_low_stock",
            "is_out_of_stock",
        ]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    category = serializers.SerializerMethodField()
    discount = serializers.SerializerMethodField()
    discounted_price = serializers.SerializerMethodField()
    variants = VariantSerializer(many=True, read_only=True)
    tags = serializers.SlugRelatedField(many=True, read_only=True, slug_field="name")
    total_stock = serializers.SerializerMethodField()
    is_low_stock = serializers.SerializerMethodField()
    is_out_of_stock = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "base_price",
            "discount",
            "discounted_price",
            "variants",
            "images",
            "tags",
            "is_active",
            "weight",
            "dimensions",
            "total_stock",
            "is_low_stock",
            "is_out_of_stock",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def _now(self):
        return self.context.get("now") or timezone.now()

    def get_category(self, product: Product) -> dict | None:
        """``None`` once the referenced category has been deleted."""
        category = product.category
        if category.is_deleted:
            return None
        return CategorySummarySerializer(category).data

    def get_discount(self, product: Product) -> dict:
        return {
            "percentage": str(product.discount_percentage),
            "start_date": product.discount_start_date,
            "end_date": product.discount_end_date,
        }

    def get_discounted_price(self, product: Product) -> str:
        price = product.effective_price(self._now())
        return str(price.quantize(CENT, rounding=ROUND_HALF_UP))

    def get_total_stock(self, product: Product) -> int:
        return product.total_stock

    def get_is_low_stock(self, product: Product) -> bool:
        return product.is_low_stock

    def get_is_out_of_stock(self, product: Product) -> bool:
        return product.is_out_of_stock
