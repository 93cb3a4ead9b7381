"""Shared query DTOs.

List endpoints receive raw query-string values.  These pydantic models
coerce them ("2" -> 2, "false" -> False) and reject anything that does
not coerce; a blank parameter counts as absent.
"""

from __future__ import annotations

from typing import Any, Literal

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PageQueryDTO(BaseModel):
    """``page``/``limit`` pair shared by every paginated endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    page: int = 1
    limit: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and not value.strip())
            }
        return data

    @field_validator("page")
    @classmethod
    def page_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Page must be 1 or greater.")
        return v

    @field_validator("limit")
    @classmethod
    def limit_within_bounds(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Limit must be 1 or greater.")
        if v > settings.MAX_PAGE_SIZE:
            raise ValueError(f"Limit cannot exceed {settings.MAX_PAGE_SIZE}.")
        return v


class ListQueryDTO(PageQueryDTO):
    """Adds sorting on top of pagination.

    Subclasses narrow ``sort_by`` to the fields their model allows.
    """

    sort_by: str = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"

    @field_validator("sort_order", mode="before")
    @classmethod
    def normalise_sort_order(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    def ordering(self) -> list[str]:
        """ORM ``order_by`` arguments, with ``id`` as a stable tie-breaker."""
        prefix = "-" if self.sort_order == "desc" else ""
        return [f"{prefix}{self.sort_by}", f"{prefix}id"]

    def filter_data(self) -> dict[str, str]:
        """Filter values as strings for a django-filter ``FilterSet``."""
        return {}
