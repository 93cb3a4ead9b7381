"""Unit tests for product DTOs."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import (
    CreateProductDTO,
    DiscountDTO,
    ProductListQueryDTO,
    UpdateProductDTO,
    UpdateVariantDTO,
)

pytestmark = pytest.mark.unit


def _payload(**overrides):
    data = {
        "name": "Shirt",
        "description": "Cotton shirt",
        "category": str(uuid.uuid4()),
        "base_price": "19.90",
        "variants": [{"sku": " ab-1 ", "price": "19.90", "stock": 3}],
    }
    data.update(overrides)
    return data


class TestCreateProductDTO:
    def test_valid_payload(self):
        dto = CreateProductDTO.model_validate(_payload())
        assert dto.base_price == Decimal("19.90")
        assert dto.variants[0].low_stock_threshold == 10
        assert dto.is_active is True

    def test_sku_trimmed(self):
        dto = CreateProductDTO.model_validate(_payload())
        assert dto.skus == ["ab-1"]

    def test_variants_required(self):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(_payload(variants=[]))

    def test_negative_base_price_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(_payload(base_price="-1"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(
                _payload(variants=[{"sku": "A", "price": "1", "stock": -1}])
            )

    @pytest.mark.parametrize(
        "variant",
        [
            {"sku": "A", "price": "1", "stock": 10**20},
            {"sku": "A", "price": "1", "stock": 2**31},
            {"sku": "A", "price": "1", "low_stock_threshold": 2**31},
            {"sku": "A", "price": "12345678901.00"},
            {"sku": "A", "price": "1.005"},
        ],
    )
    def test_variant_values_outside_column_range_rejected(self, variant):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(_payload(variants=[variant]))

    def test_largest_column_values_accepted(self):
        dto = CreateProductDTO.model_validate(
            _payload(
                base_price="9999999999.99",
                variants=[{"sku": "A", "price": "9999999999.99", "stock": 2**31 - 1}],
            )
        )
        assert dto.variants[0].stock == 2**31 - 1

    @pytest.mark.parametrize(
        "overrides", [{"base_price": "1e20"}, {"weight": "12345678.0001"}]
    )
    def test_product_values_outside_column_range_rejected(self, overrides):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(_payload(**overrides))

    def test_invalid_category_id_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(_payload(category="not-a-uuid"))

    def test_blank_sku_rejected(self):
        with pytest.raises(ValidationError, match="SKU must not be empty"):
            CreateProductDTO.model_validate(
                _payload(variants=[{"sku": "  ", "price": "1"}])
            )

    def test_tags_cleaned(self):
        dto = CreateProductDTO.model_validate(_payload(tags=[" a", "b", "a", ""]))
        assert dto.tags == ["a", "b"]

    def test_name_too_long(self):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(_payload(name="x" * 101))


class TestDiscountDTO:
    def test_percentage_over_100_rejected(self):
        with pytest.raises(ValidationError):
            DiscountDTO(percentage=Decimal("101"))

    def test_percentage_with_three_decimals_rejected(self):
        with pytest.raises(ValidationError):
            DiscountDTO(percentage=Decimal("10.125"))

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="end_date must be after"):
            DiscountDTO(
                percentage=Decimal("10"),
                start_date="2025-02-01T00:00:00Z",
                end_date="2025-01-01T00:00:00Z",
            )


class TestUpdateProductDTO:
    def test_tracks_sent_fields(self):
        dto = UpdateProductDTO.model_validate({"name": "New"})
        assert dto.has("name")
        assert not dto.has("description")

    def test_explicit_null_on_required_field_rejected(self):
        with pytest.raises(ValidationError, match="cannot be null"):
            UpdateProductDTO.model_validate({"name": None})

    def test_null_discount_allowed(self):
        dto = UpdateProductDTO.model_validate({"discount": None})
        assert dto.has("discount")
        assert dto.discount is None

    def test_empty_variant_list_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO.model_validate({"variants": []})


class TestUpdateVariantDTO:
    def test_changes_only_sent_fields(self):
        dto = UpdateVariantDTO.model_validate({"stock": 7, "sku": "x-9"})
        assert dto.changes() == {"stock": 7, "sku": "x-9"}

    def test_stock_over_column_range_rejected(self):
        with pytest.raises(ValidationError):
            UpdateVariantDTO.model_validate({"stock": 10**20})

    def test_null_stock_rejected(self):
        with pytest.raises(ValidationError):
            UpdateVariantDTO.model_validate({"stock": None})


class TestProductListQueryDTO:
    def test_defaults(self):
        query = ProductListQueryDTO.model_validate({})
        assert query.page == 1
        assert query.limit == 10
        assert query.ordering() == ["-created_at", "-id"]
        assert query.filter_data() == {}

    def test_coerces_strings(self):
        query = ProductListQueryDTO.model_validate(
            {"page": "2", "limit": "5", "is_active": "false", "min_price": "10"}
        )
        assert query.page == 2
        assert query.filter_data() == {"min_price": "10", "is_active": "false"}

    def test_blank_values_are_absent(self):
        query = ProductListQueryDTO.model_validate({"search": " ", "page": ""})
        assert query.search is None
        assert query.page == 1

    def test_tags_split(self):
        query = ProductListQueryDTO.model_validate({"tags": "red, blue,,"})
        assert query.tags == ["red", "blue"]
        assert query.filter_data()["tags"] == "red,blue"

    def test_ascending_sort(self):
        query = ProductListQueryDTO.model_validate(
            {"sort_by": "base_price", "sort_order": "ASC"}
        )
        assert query.ordering() == ["base_price", "id"]

    @pytest.mark.parametrize(
        "params",
        [
            {"page": "0"},
            {"page": "abc"},
            {"limit": "101"},
            {"sort_by": "sku"},
            {"sort_order": "sideways"},
            {"is_active": "maybe"},
        ],
    )
    def test_invalid_values_rejected(self, params):
        with pytest.raises(ValidationError):
            ProductListQueryDTO.model_validate(params)
