from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.categories.dtos import (
    CategoryListQueryDTO,
    CreateCategoryDTO,
    UpdateCategoryDTO,
)

pytestmark = pytest.mark.unit


class TestCreateCategoryDTO:
    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            CreateCategoryDTO(name="   ")

    def test_name_too_long(self):
        with pytest.raises(ValidationError):
            CreateCategoryDTO(name="x" * 51)

    def test_description_defaults_to_empty(self):
        assert CreateCategoryDTO(name="Home").description == ""


class TestUpdateCategoryDTO:
    def test_changes_only_sent_fields(self):
        dto = UpdateCategoryDTO.model_validate({"description": "New"})
        assert dto.changes() == {"description": "New"}

    @pytest.mark.parametrize("field", ["name", "description", "is_active"])
    def test_explicit_null_rejected(self, field):
        with pytest.raises(ValidationError, match="cannot be null"):
            UpdateCategoryDTO.model_validate({field: None})


class TestCategoryListQueryDTO:
    def test_filter_data(self):
        query = CategoryListQueryDTO.model_validate(
            {"search": "app", "is_active": "true", "sort_by": "name"}
        )
        assert query.filter_data() == {"search": "app", "is_active": "true"}
        assert query.ordering() == ["-name", "-id"]

    def test_unknown_sort_field_rejected(self):
        with pytest.raises(ValidationError):
            CategoryListQueryDTO.model_validate({"sort_by": "description"})
