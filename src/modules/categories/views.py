"""Category API views.

Exposes the ``CategoryService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes;
the view never swallows generic exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.dtos import (
    CategoryListQueryDTO,
    CreateCategoryDTO,
    UpdateCategoryDTO,
)
from modules.categories.exceptions import CategoryNotFound
from modules.categories.models import Category
from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.categories.serializers import CategorySerializer
from modules.categories.services import CategoryService
from modules.core.exceptions import InvalidQuery
from modules.core.pagination import paginated_response

NOT_FOUND = {"detail": "Category not found."}


class CategoryViewSet(GenericViewSet):
    """ViewSet for Category CRUD operations.

    All ORM access goes through ``CategoryService`` and
    ``CategoryDjangoRepository``.
    """

    queryset = Category.objects.alive()
    serializer_class = CategorySerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CategoryService(repository=CategoryDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/categories/"""
        try:
            query = CategoryListQueryDTO.model_validate(request.query_params.dict())
            page = self._service.list_categories(query)
        except (PydanticValidationError, InvalidQuery) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        data = CategorySerializer(page.items, many=True).data
        return paginated_response(page, data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/categories/{pk}/"""
        try:
            category = self._service.get_category(pk)
        except CategoryNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(CategorySerializer(category).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/categories/"""
        try:
            dto = CreateCategoryDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        category = self._service.create_category(dto)
        return Response(
            CategorySerializer(category).data, status=status.HTTP_201_CREATED
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/categories/{pk}/"""
        try:
            dto = UpdateCategoryDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            category = self._service.update_category(pk, dto)
        except CategoryNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(CategorySerializer(category).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/categories/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/categories/{pk}/"""
        try:
            self._service.delete_category(pk)
        except CategoryNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
