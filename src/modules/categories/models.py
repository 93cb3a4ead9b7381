"""Category model.

Categories are referenced by products and managed independently of
them.  Names are not unique: two categories may share a name.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import SoftDeleteModel


class Category(SoftDeleteModel):
    """Catalog category.

    Deleting a category is a soft delete and is not blocked by products
    that still reference it; those products keep the reference, which
    no longer resolves through the category repository.
    """

    name = models.CharField(max_length=50)
    description = models.CharField(max_length=500, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "categories"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active"], name="categories_active_idx"),
        ]

    def __str__(self) -> str:
        return self.name
