"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected repositories.

Business rules enforced here:
- The referenced category must exist, on create and whenever an update
  changes it.
- A SKU is unique across every variant of every product.  The payload is
  checked for internal duplicates first, then against stored variants
  (excluding the product being updated, or the variant being edited).
- The pre-checks give a friendly rejection; the ``UNIQUE`` index on
  ``Variant.sku`` is what actually closes the window between check and
  write, and its ``IntegrityError`` surfaces as the same conflict.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Iterable, List

import structlog
from django.db import IntegrityError, transaction

from modules.products.exceptions import (
    InvalidCategory,
    ProductNotFound,
    SkuAlreadyExists,
    VariantNotFound,
)
from modules.products.models import Product, Variant

if TYPE_CHECKING:
    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.core.pagination import Page
    from modules.products.dtos import (
        CreateProductDTO,
        DiscountDTO,
        ProductListQueryDTO,
        UpdateProductDTO,
        UpdateVariantDTO,
        VariantDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

SIMPLE_FIELDS = ("name", "description", "base_price", "is_active", "weight")


def _build_variants(dtos: Iterable[VariantDTO]) -> List[Variant]:
    return [Variant(**dto.model_dump()) for dto in dtos]


def _apply_discount(product: Product, discount: DiscountDTO | None) -> None:
    product.discount_percentage = discount.percentage if discount else 0
    product.discount_start_date = discount.start_date if discount else None
    product.discount_end_date = discount.end_date if discount else None


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` and an ``ICategoryRepository`` via
    constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._repo = repository
        self._category_repo = category_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product with its variants.

        Raises:
            InvalidCategory: if the category does not exist.
            SkuAlreadyExists: if SKUs repeat within the payload or are
                already taken.
        """
        log = logger.bind(category_id=str(dto.category), skus=dto.skus)

        self._ensure_category(dto.category)
        self._ensure_skus_available(dto.skus)

        product = Product(
            name=dto.name,
            description=dto.description,
            category_id=dto.category,
            base_price=dto.base_price,
            images=[image.model_dump() for image in dto.images],
            is_active=dto.is_active,
            weight=dto.weight,
            dimensions=dto.dimensions.model_dump(mode="json") if dto.dimensions else None,
        )
        _apply_discount(product, dto.discount)

        try:
            product = self._repo.create(product, _build_variants(dto.variants), dto.tags)
        except IntegrityError as exc:
            log.warning("product.sku_conflict_on_write")
            raise SkuAlreadyExists("One or more SKUs already exist.", dto.skus) from exc

        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Merge the supplied fields into an existing product.

        Absent fields keep their stored value.  ``variants`` replaces the
        whole variant list and ``discount`` the whole discount.

        Raises:
            ProductNotFound: if the product does not exist.
            InvalidCategory: if a new category does not exist.
            SkuAlreadyExists: if replacement SKUs collide.
        """
        product = self._get_or_raise(id)
        log = logger.bind(product_id=str(id))

        if dto.has("category"):
            self._ensure_category(dto.category)
            product.category_id = dto.category
        if dto.has("variants"):
            self._ensure_skus_available(dto.skus, exclude_product_id=str(product.id))

        for field in SIMPLE_FIELDS:
            if dto.has(field):
                setattr(product, field, getattr(dto, field))
        if dto.has("discount"):
            _apply_discount(product, dto.discount)
        if dto.has("images"):
            product.images = [image.model_dump() for image in dto.images or []]
        if dto.has("dimensions"):
            product.dimensions = (
                dto.dimensions.model_dump(mode="json") if dto.dimensions else None
            )

        variants = _build_variants(dto.variants) if dto.has("variants") else None
        tags = (dto.tags or []) if dto.has("tags") else None
        try:
            product = self._repo.update(product, variants=variants, tags=tags)
        except IntegrityError as exc:
            log.warning("product.sku_conflict_on_write")
            raise SkuAlreadyExists("One or more SKUs already exist.", dto.skus) from exc

        log.info("product.updated", fields=sorted(dto.model_fields_set))
        return product

    @transaction.atomic
    def update_variant(
        self, product_id: str, variant_id: str, dto: UpdateVariantDTO
    ) -> Variant:
        """Update one variant in place.

        Only a changed SKU is checked, and only against the rest of the
        catalog.

        Raises:
            ProductNotFound: if the product does not exist.
            VariantNotFound: if the product has no such variant.
            SkuAlreadyExists: if the new SKU is taken.
        """
        self._get_or_raise(product_id)
        variant = self._repo.get_variant(product_id, variant_id)
        if not variant:
            raise VariantNotFound(f"Variant {variant_id} not found.")

        log = logger.bind(product_id=str(product_id), variant_id=str(variant_id))
        changes = dto.changes()

        new_sku = changes.get("sku")
        if new_sku is not None and new_sku != variant.sku:
            if self._repo.find_existing_skus([new_sku]):
                log.warning("product.duplicate_sku", sku=new_sku)
                raise SkuAlreadyExists("SKU already exists.", [new_sku])

        for field, value in changes.items():
            setattr(variant, field, value)

        try:
            variant = self._repo.save_variant(variant)
        except IntegrityError as exc:
            log.warning("product.sku_conflict_on_write", sku=variant.sku)
            raise SkuAlreadyExists("SKU already exists.", [variant.sku]) from exc

        log.info("product.variant_updated", fields=sorted(changes))
        return variant

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Soft-delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, query: ProductListQueryDTO) -> Page[Product]:
        return self._repo.search(query)

    def get_product(self, id: str) -> Product:
        """Raises ``ProductNotFound`` if the product does not exist."""
        return self._get_or_raise(id)

    # ------------------------------------------------------------------
    # Invariant checks
    # ------------------------------------------------------------------

    def _get_or_raise(self, id: str) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def _ensure_category(self, category_id) -> None:
        if not self._category_repo.get_by_id(str(category_id)):
            logger.warning("product.invalid_category", category_id=str(category_id))
            raise InvalidCategory("Invalid category ID.")

    def _ensure_skus_available(
        self, skus: List[str], exclude_product_id: str | None = None
    ) -> None:
        duplicates = [sku for sku, count in Counter(skus).items() if count > 1]
        if duplicates:
            logger.warning("product.duplicate_sku_in_payload", skus=duplicates)
            raise SkuAlreadyExists("Duplicate SKUs found in variants.", duplicates)

        taken = self._repo.find_existing_skus(
            set(skus), exclude_product_id=exclude_product_id
        )
        if taken:
            logger.warning("product.duplicate_sku", skus=sorted(taken))
            raise SkuAlreadyExists("One or more SKUs already exist.", taken)
