"""Category DRF serializers (output only).

Input is validated by the pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.categories.models import Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = [
            "id",
            "name",
            "description",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CategorySummarySerializer(serializers.ModelSerializer):
    """Compact form embedded in product payloads."""

    class Meta:
        model = Category
        fields = ["id", "name", "description"]
        read_only_fields = fields
