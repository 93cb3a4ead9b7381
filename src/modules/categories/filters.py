from django_filters import rest_framework as filters

from modules.categories.models import Category


class CategoryFilter(filters.FilterSet):
    search = filters.CharFilter(field_name="name", lookup_expr="icontains")
    is_active = filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Category
        fields = ["search", "is_active"]
