"""Product DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and the service layer.
DTOs are immutable (``frozen=True``); they are the shape gate, so the
service only re-checks rules that need the database (category exists,
SKU is free).

- ``CreateProductDTO``: input for product creation (with variants).
- ``UpdateProductDTO``: merge update; only fields present in the request
  body are applied.  ``model_fields_set`` records which ones were sent.
- ``UpdateVariantDTO``: partial update of one variant.
- ``ProductListQueryDTO``: list filters, sorting and pagination.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Literal, Self
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from modules.core.dtos import ListQueryDTO


def _clean_sku(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("SKU must not be empty.")
    return v.strip()


# Column limits: PositiveIntegerField and DecimalField(max_digits, decimal_places).
MAX_QUANTITY = 2_147_483_647
MONEY = {"max_digits": 12, "decimal_places": 2}
PERCENTAGE = {"max_digits": 5, "decimal_places": 2}
WEIGHT = {"max_digits": 10, "decimal_places": 3}

_REQUIRED_WHEN_SENT = (
    "name",
    "description",
    "category",
    "base_price",
    "variants",
    "is_active",
)


def _clean_tags(tags: List[str]) -> List[str]:
    """Strip, drop blanks and de-duplicate while keeping order."""
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


# ---------------------------------------------------------------------------
# Nested value objects
# ---------------------------------------------------------------------------


class DiscountDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100, **PERCENTAGE)
    start_date: datetime | None = None
    end_date: datetime | None = None

    @model_validator(mode="after")
    def end_after_start(self) -> Self:
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValueError("Discount end_date must be after start_date.")
        return self


class ImageDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1, max_length=2048)
    label: str = Field(default="", max_length=200)


class DimensionsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: Decimal | None = Field(default=None, ge=0)
    width: Decimal | None = Field(default=None, ge=0)
    height: Decimal | None = Field(default=None, ge=0)


class VariantDTO(BaseModel):
    """One variant inside a create/replace payload."""

    model_config = ConfigDict(frozen=True)

    size: str = Field(default="", max_length=50)
    color: str = Field(default="", max_length=50)
    material: str = Field(default="", max_length=100)
    sku: str = Field(max_length=64)
    price: Decimal = Field(ge=0, **MONEY)
    stock: int = Field(default=0, ge=0, le=MAX_QUANTITY)
    low_stock_threshold: int = Field(default=10, ge=0, le=MAX_QUANTITY)

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_empty(cls, v: str) -> str:
        return _clean_sku(v)


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``variants`` must hold at least one entry.  Duplicate SKUs inside the
    list are left to the service, which reports them as a SKU conflict.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    category: UUID
    base_price: Decimal = Field(ge=0, **MONEY)
    discount: DiscountDTO | None = None
    variants: List[VariantDTO] = Field(min_length=1)
    images: List[ImageDTO] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    is_active: bool = True
    weight: Decimal | None = Field(default=None, ge=0, **WEIGHT)
    dimensions: DimensionsDTO | None = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)

    @property
    def skus(self) -> List[str]:
        return [variant.sku for variant in self.variants]


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product merge updates.

    Every field is optional.  ``variants``, when sent, replaces the whole
    variant list; ``discount``, when sent, replaces the whole discount.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=1000)
    category: UUID | None = None
    base_price: Decimal | None = Field(default=None, ge=0, **MONEY)
    discount: DiscountDTO | None = None
    variants: List[VariantDTO] | None = Field(default=None, min_length=1)
    images: List[ImageDTO] | None = None
    tags: List[str] | None = None
    is_active: bool | None = None
    weight: Decimal | None = Field(default=None, ge=0, **WEIGHT)
    dimensions: DimensionsDTO | None = None

    @model_validator(mode="after")
    def required_fields_not_null(self) -> Self:
        nulls = [
            field
            for field in _REQUIRED_WHEN_SENT
            if field in self.model_fields_set and getattr(self, field) is None
        ]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}.")
        return self

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str] | None) -> List[str] | None:
        return _clean_tags(v) if v is not None else v

    def has(self, field: str) -> bool:
        """True when ``field`` was present in the request body."""
        return field in self.model_fields_set

    @property
    def skus(self) -> List[str]:
        return [variant.sku for variant in self.variants or []]


class UpdateVariantDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: str | None = Field(default=None, max_length=50)
    color: str | None = Field(default=None, max_length=50)
    material: str | None = Field(default=None, max_length=100)
    sku: str | None = Field(default=None, max_length=64)
    price: Decimal | None = Field(default=None, ge=0, **MONEY)
    stock: int | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    low_stock_threshold: int | None = Field(default=None, ge=0, le=MAX_QUANTITY)

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_empty(cls, v: str | None) -> str:
        return _clean_sku(v or "")

    @model_validator(mode="after")
    def sent_fields_not_null(self) -> Self:
        nulls = [f for f in self.model_fields_set if getattr(self, f) is None]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}.")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(include=self.model_fields_set)


# ---------------------------------------------------------------------------
# List query
# ---------------------------------------------------------------------------


class ProductListQueryDTO(ListQueryDTO):
    """``GET /products/`` query string, coerced and validated."""

    search: str | None = None
    category: UUID | None = None
    min_price: Decimal | None = Field(default=None, ge=0, **MONEY)
    max_price: Decimal | None = Field(default=None, ge=0, **MONEY)
    tags: List[str] | None = None
    is_active: bool | None = None
    sort_by: Literal["created_at", "updated_at", "name", "base_price"] = "created_at"

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _clean_tags(v.split(",")) or None
        return v

    def filter_data(self) -> dict[str, str]:
        data: dict[str, str] = {}
        if self.search is not None:
            data["search"] = self.search
        if self.category is not None:
            data["category"] = str(self.category)
        if self.min_price is not None:
            data["min_price"] = str(self.min_price)
        if self.max_price is not None:
            data["max_price"] = str(self.max_price)
        if self.tags:
            data["tags"] = ",".join(self.tags)
        if self.is_active is not None:
            data["is_active"] = "true" if self.is_active else "false"
        return data
