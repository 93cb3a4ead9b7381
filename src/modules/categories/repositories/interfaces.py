"""Category repository interface.

Extends ``IRepository[Category]`` with the count used by the inventory
summary.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.categories.dtos import CategoryListQueryDTO
    from modules.categories.models import Category
    from modules.core.pagination import Page


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for categories."""

    @abstractmethod
    def search(self, query: CategoryListQueryDTO) -> Page[Category]:
        """Filtered, sorted, paginated category listing."""

    @abstractmethod
    def count_active(self) -> int:
        """Number of live categories flagged active."""
