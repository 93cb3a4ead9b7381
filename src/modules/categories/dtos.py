"""Category DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and the service layer.
DTOs are immutable (``frozen=True``).

- ``CreateCategoryDTO``: input for category creation.
- ``UpdateCategoryDTO``: partial update; only fields present in the
  request body are applied (see ``model_fields_set``).
- ``CategoryListQueryDTO``: list filters, sorting and pagination.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.core.dtos import ListQueryDTO


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Category name must not be empty.")
    return v


class CreateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=50)
    description: str = Field(default="", max_length=500)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return _clean_name(v)


class UpdateCategoryDTO(BaseModel):
    """All fields optional; an absent field leaves the stored value alone."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("Category name cannot be null.")
        return _clean_name(v)

    @field_validator("description", "is_active")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null.")
        return v

    def changes(self) -> dict:
        """Only the fields the caller supplied."""
        return self.model_dump(include=self.model_fields_set)


class CategoryListQueryDTO(ListQueryDTO):
    search: str | None = None
    is_active: bool | None = None
    sort_by: Literal["created_at", "updated_at", "name"] = "created_at"

    def filter_data(self) -> dict[str, str]:
        data: dict[str, str] = {}
        if self.search is not None:
            data["search"] = self.search
        if self.is_active is not None:
            data["is_active"] = "true" if self.is_active else "false"
        return data
