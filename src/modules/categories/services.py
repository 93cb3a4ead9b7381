"""Category service layer (Use Cases).

Orchestrates category CRUD, delegating persistence to the injected
``ICategoryRepository``.  Deleting a category does not cascade to, nor
is it blocked by, the products that reference it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.categories.exceptions import CategoryNotFound
from modules.categories.models import Category

if TYPE_CHECKING:
    from modules.categories.dtos import (
        CategoryListQueryDTO,
        CreateCategoryDTO,
        UpdateCategoryDTO,
    )
    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.core.pagination import Page

logger = structlog.get_logger(__name__)


class CategoryService:
    """Application service for Category use-cases.

    Receives an ``ICategoryRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICategoryRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        category = Category(
            name=dto.name,
            description=dto.description,
            is_active=dto.is_active,
        )
        category = self._repo.save(category)
        logger.info("category.created", category_id=str(category.id), name=category.name)
        return category

    @transaction.atomic
    def update_category(self, id: str, dto: UpdateCategoryDTO) -> Category:
        """Apply the supplied fields to an existing category.

        Raises:
            CategoryNotFound: if the category does not exist.
        """
        category = self._get_or_raise(id)

        changes = dto.changes()
        for field, value in changes.items():
            setattr(category, field, value)

        category = self._repo.save(category)
        logger.info(
            "category.updated", category_id=str(id), fields=sorted(changes)
        )
        return category

    @transaction.atomic
    def delete_category(self, id: str) -> None:
        """Soft-delete a category.

        Raises:
            CategoryNotFound: if the category does not exist.
        """
        if not self._repo.delete(id):
            raise CategoryNotFound(f"Category {id} not found.")
        logger.info("category.deleted", category_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_categories(self, query: CategoryListQueryDTO) -> Page[Category]:
        return self._repo.search(query)

    def get_category(self, id: str) -> Category:
        """Raises ``CategoryNotFound`` if the category does not exist."""
        return self._get_or_raise(id)

    def _get_or_raise(self, id: str) -> Category:
        category = self._repo.get_by_id(id)
        if not category:
            raise CategoryNotFound(f"Category {id} not found.")
        return category
