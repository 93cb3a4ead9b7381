"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity into an API response.

Low-stock and out-of-stock are expressed as ``EXISTS`` subqueries over
the variant table so the database can count them without loading rows.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Exists, F, Min, OuterRef, QuerySet

from modules.core.exceptions import InvalidQuery
from modules.core.pagination import Page, paginate
from modules.products.dtos import ProductListQueryDTO
from modules.products.filters import ProductFilter
from modules.products.models import Product, Tag, Variant
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def _low_stock_variant() -> Exists:
    return Exists(
        Variant.objects.filter(
            product=OuterRef("pk"), stock__lte=F("low_stock_threshold")
        )
    )


def _any_variant() -> Exists:
    return Exists(Variant.objects.filter(product=OuterRef("pk")))


def _variant_in_stock() -> Exists:
    return Exists(Variant.objects.filter(product=OuterRef("pk"), stock__gt=0))


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _alive(self) -> QuerySet:
        return Product.objects.alive().select_related("category").prefetch_related(
            "variants", "tags"
        )

    def _active(self) -> QuerySet:
        return Product.objects.alive().filter(is_active=True)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a live product by primary key.

        Returns ``None`` for unknown, deleted or malformed IDs.
        """
        try:
            return self._alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def search(self, query: ProductListQueryDTO) -> Page[Product]:
        filterset = ProductFilter(data=query.filter_data(), queryset=self._alive())
        if not filterset.is_valid():
            raise InvalidQuery(filterset.errors.as_json())
        queryset = filterset.qs.order_by(*query.ordering())
        return paginate(queryset, query.page, query.limit)

    def find_existing_skus(
        self, skus: Iterable[str], exclude_product_id: Optional[str] = None
    ) -> Set[str]:
        """Soft-deleted products are included: their SKUs stay reserved."""
        queryset = Variant.objects.filter(sku__in=set(skus))
        if exclude_product_id is not None:
            queryset = queryset.exclude(product_id=exclude_product_id)
        return set(queryset.values_list("sku", flat=True))

    def get_variant(self, product_id: str, variant_id: str) -> Optional[Variant]:
        try:
            return (
                Variant.objects.select_related("product")
                .filter(
                    id=variant_id,
                    product_id=product_id,
                    product__deleted_at__isnull=True,
                )
                .first()
            )
        except (ValueError, ValidationError):
            return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist product fields only (variants untouched)."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    @transaction.atomic
    def create(
        self, product: Product, variants: List[Variant], tags: List[str]
    ) -> Product:
        self.save(product)
        self._write_variants(product, variants)
        self._write_tags(product, tags)
        logger.info(
            "product.variants_written",
            product_id=str(product.id),
            variant_count=len(variants),
        )
        return self.get_by_id(str(product.id)) or product

    @transaction.atomic
    def update(
        self,
        product: Product,
        variants: Optional[List[Variant]] = None,
        tags: Optional[List[str]] = None,
    ) -> Product:
        self.save(product)
        if variants is not None:
            # Old rows go first so re-submitted SKUs do not hit the index.
            product.variants.all().delete()
            self._write_variants(product, variants)
        if tags is not None:
            self._write_tags(product, tags)
        return self.get_by_id(str(product.id)) or product

    @transaction.atomic
    def save_variant(self, variant: Variant) -> Variant:
        variant.save()
        variant.product.save(update_fields=["updated_at"])
        logger.info(
            "product.variant_saved",
            product_id=str(variant.product_id),
            variant_id=str(variant.id),
            sku=variant.sku,
        )
        return variant

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a product by ID.

        Returns ``True`` if the product was found and soft-deleted,
        ``False`` if no live product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        return True

    def _write_variants(self, product: Product, variants: List[Variant]) -> None:
        for position, variant in enumerate(variants):
            variant.product = product
            variant.position = position
            variant.save()

    def _write_tags(self, product: Product, names: List[str]) -> None:
        tags = [Tag.objects.get_or_create(name=name)[0] for name in names]
        product.tags.set(tags)

    # ------------------------------------------------------------------
    # Reporting look-ups
    # ------------------------------------------------------------------

    def low_stock(self, page: int, limit: int) -> Page[Product]:
        """Ordered by each product's lowest variant stock, then creation."""
        queryset = (
            self._active()
            .filter(_low_stock_variant())
            .select_related("category")
            .prefetch_related("variants")
            .annotate(min_stock=Min("variants__stock"))
            .order_by("min_stock", "created_at", "id")
        )
        return paginate(queryset, page, limit)

    def count_active(self) -> int:
        return self._active().count()

    def count_low_stock(self) -> int:
        return self._active().filter(_low_stock_variant()).count()

    def count_out_of_stock(self) -> int:
        return (
            self._active().filter(_any_variant()).exclude(_variant_in_stock()).count()
        )

    def iter_active_with_variants(self) -> Iterator[Product]:
        return iter(self._active().prefetch_related("variants").order_by("created_at"))

    def count_by_category(self) -> List[Dict[str, Any]]:
        rows = (
            self._active()
            .filter(category__deleted_at__isnull=True)
            .values("category_id", "category__name")
            .annotate(product_count=Count("id"))
            .order_by("-product_count", "category__name")
        )
        return [
            {
                "category_id": row["category_id"],
                "category_name": row["category__name"],
                "product_count": row["product_count"],
            }
            for row in rows
        ]
