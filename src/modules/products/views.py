"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes;
the view never swallows generic exceptions.
"""

from __future__ import annotations

from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.core.exceptions import InvalidQuery
from modules.core.pagination import paginated_response
from modules.products.dtos import (
    CreateProductDTO,
    ProductListQueryDTO,
    UpdateProductDTO,
    UpdateVariantDTO,
)
from modules.products.exceptions import (
    InvalidCategory,
    ProductNotFound,
    SkuAlreadyExists,
    VariantNotFound,
)
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer, VariantSerializer
from modules.products.services import ProductService

NOT_FOUND = {"detail": "Product not found."}
VARIANT_NOT_FOUND = {"detail": "Variant not found."}


def _bad_request(exc: Exception) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def _conflict(exc: SkuAlreadyExists) -> Response:
    return Response(
        {"detail": str(exc), "skus": exc.skus},
        status=status.HTTP_409_CONFLICT,
    )


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Product.objects.alive()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
        )

    def get_serializer_context(self) -> dict:
        context = super().get_serializer_context()
        context["now"] = timezone.now()
        return context

    def _render(self, product: Product, **kwargs) -> Response:
        data = ProductSerializer(product, context=self.get_serializer_context()).data
        return Response(data, **kwargs)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        try:
            query = ProductListQueryDTO.model_validate(request.query_params.dict())
            page = self._service.list_products(query)
        except (PydanticValidationError, InvalidQuery) as exc:
            return _bad_request(exc)

        data = ProductSerializer(
            page.items, many=True, context=self.get_serializer_context()
        ).data
        return paginated_response(page, data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return self._render(product)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            product = self._service.create_product(dto)
        except InvalidCategory as exc:
            return _bad_request(exc)
        except SkuAlreadyExists as exc:
            return _conflict(exc)
        return self._render(product, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        try:
            dto = UpdateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except InvalidCategory as exc:
            return _bad_request(exc)
        except SkuAlreadyExists as exc:
            return _conflict(exc)
        return self._render(product)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    @action(
        detail=True,
        methods=["put", "patch"],
        url_path=r"variants/(?P<variant_id>[^/.]+)",
    )
    def update_variant(
        self, request: Request, pk: str | None = None, variant_id: str | None = None
    ) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/variants/{variant_id}/"""
        try:
            dto = UpdateVariantDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            variant = self._service.update_variant(pk, variant_id, dto)
        except ProductNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except VariantNotFound:
            return Response(VARIANT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except SkuAlreadyExists as exc:
            return _conflict(exc)
        return Response(VariantSerializer(variant).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
