from django.db.models import Q, QuerySet
from django_filters import rest_framework as filters

from modules.products.models import Product


class ProductFilter(filters.FilterSet):
    """Predicate half of the product list query.

    Ordering and slicing are applied afterwards by the repository, so the
    same filtered queryset also backs the total count.
    """

    search = filters.CharFilter(method="filter_search")
    category = filters.UUIDFilter(field_name="category_id")
    min_price = filters.NumberFilter(field_name="base_price", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="base_price", lookup_expr="lte")
    tags = filters.CharFilter(method="filter_tags")
    is_active = filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Product
        fields = ["search", "category", "min_price", "max_price", "tags", "is_active"]

    def filter_search(self, queryset: QuerySet, name: str, value: str) -> QuerySet:
        return queryset.filter(
            Q(name__icontains=value) | Q(description__icontains=value)
        )

    def filter_tags(self, queryset: QuerySet, name: str, value: str) -> QuerySet:
        tags = [tag.strip() for tag in value.split(",") if tag.strip()]
        if not tags:
            return queryset
        # The tag join can repeat a product once per matching tag.
        matching = Product.objects.filter(tags__name__in=tags).values("pk")
        return queryset.filter(pk__in=matching)
