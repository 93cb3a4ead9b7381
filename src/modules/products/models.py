"""Product aggregate: products, their variants and tags.

Business rules implemented:
- A variant SKU is unique across the whole catalog, not only within
  its product (``UNIQUE`` index on ``Variant.sku``).
- Variants belong to exactly one product and are deleted with it; they
  are never looked up on their own.
- Base price, variant price, stock and thresholds cannot be negative.
- Discount percentage stays within 0-100.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).  A
  soft-deleted product keeps its variant rows, so its SKUs stay taken.

Discounted price, total stock and the stock flags are derived on every
read (see ``pricing`` and ``stock``) and never stored.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.categories.models import Category
from modules.core.models import BaseModel, SoftDeleteModel
from modules.products import pricing, stock


class Tag(BaseModel):
    """Free-text product label, stored once and shared between products."""

    name = models.CharField(max_length=50, unique=True)

    class Meta:
        db_table = "tags"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Product(SoftDeleteModel):
    """Product aggregate root.

    ``category`` is ``PROTECT`` at the database level; categories are
    only ever soft-deleted, which leaves the reference in place.
    """

    name = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )
    base_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0"),
        validators=[
            MinValueValidator(Decimal("0")),
            MaxValueValidator(Decimal("100")),
        ],
    )
    discount_start_date = models.DateTimeField(null=True, blank=True)
    discount_end_date = models.DateTimeField(null=True, blank=True)
    images = models.JSONField(default=list, blank=True)
    tags = models.ManyToManyField(Tag, blank=True, related_name="products")
    is_active = models.BooleanField(default=True)
    weight = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    dimensions = models.JSONField(null=True, blank=True, default=None)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active"], name="products_active_idx"),
            models.Index(fields=["base_price"], name="products_base_price_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(base_price__gte=0),
                name="products_base_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(discount_percentage__gte=0)
                & models.Q(discount_percentage__lte=100),
                name="products_discount_percentage_range",
            ),
        ]

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def effective_price(self, now: datetime) -> Decimal:
        return pricing.effective_price(self, now)

    @property
    def total_stock(self) -> int:
        return stock.total_stock(self.variants.all())

    @property
    def is_low_stock(self) -> bool:
        return stock.low_stock_flag(self.variants.all())

    @property
    def is_out_of_stock(self) -> bool:
        return stock.all_out_of_stock(self.variants.all())

    def __str__(self) -> str:
        return self.name


class Variant(BaseModel):
    """Priced, stocked sub-unit of a product.

    ``position`` keeps the order in which the variants were submitted.
    ``sku`` is stored as sent, minus surrounding whitespace, and compared
    exactly: "sku-01" and "SKU-01" are distinct.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variants",
    )
    position = models.PositiveIntegerField(default=0)
    size = models.CharField(max_length=50, blank=True, default="")
    color = models.CharField(max_length=50, blank=True, default="")
    material = models.CharField(max_length=100, blank=True, default="")
    sku = models.CharField(max_length=64, unique=True)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    stock = models.PositiveIntegerField(default=0)
    low_stock_threshold = models.PositiveIntegerField(default=10)

    class Meta:
        db_table = "product_variants"
        ordering = ["position", "created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="product_variants_price_non_negative",
            ),
        ]

    @property
    def is_low_stock(self) -> bool:
        return stock.is_low_stock(self)

    @property
    def is_out_of_stock(self) -> bool:
        return stock.is_out_of_stock(self)

    def save(self, *args, **kwargs) -> None:
        if self.sku:
            self.sku = self.sku.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.sku
