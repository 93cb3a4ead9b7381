"""Report API views.

Read-only endpoints backed by ``ReportService``.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.core.dtos import PageQueryDTO
from modules.core.pagination import paginated_response
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.reports.services import ReportService


class ReportViewSet(ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ReportService(
            product_repository=ProductDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
        )

    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request: Request) -> Response:
        """GET /api/v1/reports/low-stock/"""
        try:
            query = PageQueryDTO.model_validate(request.query_params.dict())
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        page = self._service.low_stock_report(query.page, query.limit)
        data = [entry.model_dump(mode="json") for entry in page.items]
        return paginated_response(page, data)

    @action(detail=False, methods=["get"], url_path="inventory-summary")
    def inventory_summary(self, request: Request) -> Response:
        """GET /api/v1/reports/inventory-summary/"""
        return Response(self._service.inventory_summary().model_dump(mode="json"))

    @action(detail=False, methods=["get"], url_path="categories")
    def categories(self, request: Request) -> Response:
        """GET /api/v1/reports/categories/"""
        rows = self._service.category_report()
        return Response([row.model_dump(mode="json") for row in rows])
