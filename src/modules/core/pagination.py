"""Offset pagination shared by list endpoints and the low-stock report."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, List, Sequence, TypeVar

from django.db import models
from rest_framework.response import Response

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a sorted, filtered result set.

    ``total_items`` counts the whole filtered set, so a page past the
    end has no items but still reports the real total.
    """

    items: List[T]
    total_items: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit) if self.limit else 0

    def map(self, fn) -> Page:
        return Page(
            items=[fn(item) for item in self.items],
            total_items=self.total_items,
            page=self.page,
            limit=self.limit,
        )

    def meta(self) -> dict[str, int]:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages,
            "total_items": self.total_items,
            "items_per_page": self.limit,
        }


def paginate(queryset: models.QuerySet, page: int, limit: int) -> Page:
    """Count the filtered queryset, then slice ``[(page-1)*limit, page*limit)``.

    A page past the end is answered from the count alone; its offset may
    not fit the database's integer type.
    """
    total = queryset.count()
    offset = (page - 1) * limit
    if offset >= total:
        return Page(items=[], total_items=total, page=page, limit=limit)
    items = list(queryset[offset : offset + limit])
    return Page(items=items, total_items=total, page=page, limit=limit)


def paginated_response(page: Page, data: Sequence[Any]) -> Response:
    """Render serialized ``data`` with the page's pagination block."""
    return Response({"results": list(data), "pagination": page.meta()})
