"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by the SKU
uniqueness rule, in-place variant updates and the inventory reports.
Variants are only reachable through their product.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional, Set

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.core.pagination import Page
    from modules.products.dtos import ProductListQueryDTO
    from modules.products.models import Product, Variant


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def search(self, query: ProductListQueryDTO) -> Page[Product]:
        """Filtered, sorted, paginated product listing."""

    @abstractmethod
    def create(
        self, product: Product, variants: List[Variant], tags: List[str]
    ) -> Product:
        """Insert a product with its variants and tags in one unit."""

    @abstractmethod
    def update(
        self,
        product: Product,
        variants: Optional[List[Variant]] = None,
        tags: Optional[List[str]] = None,
    ) -> Product:
        """Save product fields; replace variants/tags when given."""

    @abstractmethod
    def find_existing_skus(
        self, skus: Iterable[str], exclude_product_id: Optional[str] = None
    ) -> Set[str]:
        """SKUs from ``skus`` already held by any variant in the catalog."""

    @abstractmethod
    def get_variant(self, product_id: str, variant_id: str) -> Optional[Variant]:
        """A variant of a live product, or ``None``."""

    @abstractmethod
    def save_variant(self, variant: Variant) -> Variant:
        """Persist one variant and touch its product's ``updated_at``."""

    # ------------------------------------------------------------------
    # Reporting look-ups (active, live products only)
    # ------------------------------------------------------------------

    @abstractmethod
    def low_stock(self, page: int, limit: int) -> Page[Product]:
        """Products with at least one variant at or below its threshold."""

    @abstractmethod
    def count_active(self) -> int:
        """Number of active products."""

    @abstractmethod
    def count_low_stock(self) -> int:
        """Number of active products with a low-stock variant."""

    @abstractmethod
    def count_out_of_stock(self) -> int:
        """Number of active products whose variants are all at zero."""

    @abstractmethod
    def iter_active_with_variants(self) -> Iterator[Product]:
        """Every active product with its variants prefetched."""

    @abstractmethod
    def count_by_category(self) -> List[Dict[str, Any]]:
        """``{category_id, category_name, product_count}`` per live category."""
