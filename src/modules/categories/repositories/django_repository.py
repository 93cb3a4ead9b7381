"""Django ORM implementation of the Category repository.

Follows the Null Object pattern: look-ups return ``None`` instead of
raising, and the Service Layer decides what a missing row means.
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.categories.dtos import CategoryListQueryDTO
from modules.categories.filters import CategoryFilter
from modules.categories.models import Category
from modules.categories.repositories.interfaces import ICategoryRepository
from modules.core.exceptions import InvalidQuery
from modules.core.pagination import Page, paginate

logger = structlog.get_logger(__name__)


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Category]:
        """Retrieve a live category by primary key.

        Returns ``None`` for unknown, deleted or malformed IDs.
        """
        try:
            return Category.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def search(self, query: CategoryListQueryDTO) -> Page[Category]:
        filterset = CategoryFilter(
            data=query.filter_data(), queryset=Category.objects.alive()
        )
        if not filterset.is_valid():
            raise InvalidQuery(filterset.errors.as_json())
        queryset = filterset.qs.order_by(*query.ordering())
        return paginate(queryset, query.page, query.limit)

    @transaction.atomic
    def save(self, entity: Category) -> Category:
        entity.save()
        logger.info("category.saved", category_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a category.  Referencing products are left untouched."""
        category = self.get_by_id(id)
        if not category:
            return False
        category.delete()
        return True

    def count_active(self) -> int:
        return Category.objects.alive().filter(is_active=True).count()
