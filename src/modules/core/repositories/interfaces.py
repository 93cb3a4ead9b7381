"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that the category
and product repository interfaces extend.  Service-layer code depends on
this abstraction, never on the Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from modules.core.pagination import Page

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    ``T`` is the aggregate managed by the repository (``Category``,
    ``Product``).  Look-ups only ever see live (not soft-deleted) rows.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve a live entity by primary key, or ``None``."""

    @abstractmethod
    def search(self, query: Any) -> Page[T]:
        """Run a filtered, sorted, paginated list query."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft-delete an entity; ``False`` when nothing matched."""
