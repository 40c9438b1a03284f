"""Product API views.

``ProductSaveView`` is the single POST endpoint behind the product form
and the list page: it creates a product, cancels the last one created
in this session, or bulk-deletes by id, depending on the body.
Domain exceptions are caught here and translated into fixed payloads;
their causes are logged, never returned.

``ProductListView`` serves the product list the frontend renders.
"""

from __future__ import annotations

import structlog
from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.generics import ListAPIView
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.products.exceptions import (
    InvalidProductData,
    InvalidProductType,
    ProductPersistenceError,
    ProductValidationError,
)
from modules.products.filters import ProductFilter
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.routing import RequestKind, classify_request
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from modules.products.sessions import DjangoSessionStore

logger = structlog.get_logger(__name__)

INVALID_REQUEST = {"error": "Invalid request"}


def _service_for(request: Request) -> ProductService:
    return ProductService(
        repository=ProductDjangoRepository(),
        session=DjangoSessionStore(request.session),
    )


class ProductSaveView(APIView):
    """POST /api/v1/products/save/"""

    # No OPTIONS metadata: every method but POST is an invalid request.
    metadata_class = None

    def post(self, request: Request) -> Response:
        payload = request.data
        kind = classify_request(payload)
        structlog.contextvars.bind_contextvars(request_kind=kind.value)
        service = _service_for(request)

        if kind is RequestKind.CREATE:
            return self._create(service, payload)
        if kind is RequestKind.CANCEL:
            return self._cancel(service)
        if kind is RequestKind.BULK_DELETE:
            return self._bulk_delete(service, payload["productIds"])

        logger.info("product_request.unrecognised")
        return Response(INVALID_REQUEST, status=status.HTTP_400_BAD_REQUEST)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _create(self, service: ProductService, payload: dict) -> Response:
        try:
            service.create_product(payload)
        except ProductValidationError as exc:
            return Response({"errors": exc.errors})
        except (InvalidProductType, InvalidProductData):
            logger.warning("product.invalid_type", exc_info=True)
            return Response(
                {"error": "Invalid product type"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except ProductPersistenceError:
            logger.error("product.save_failed", exc_info=True)
            return Response(
                {"error": "Failed to save the product"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "message": "Product saved successfully",
                "redirect": settings.PRODUCT_REDIRECT_URL,
            }
        )

    def _cancel(self, service: ProductService) -> Response:
        try:
            service.cancel_last_product()
        except ProductPersistenceError:
            logger.error("product.cancel_failed", exc_info=True)
            return Response(
                {"error": "Failed to cancel the product"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "message": "Product canceled successfully",
                "redirect": settings.PRODUCT_REDIRECT_URL,
            }
        )

    def _bulk_delete(self, service: ProductService, product_ids) -> Response:
        if not isinstance(product_ids, list):
            return Response(INVALID_REQUEST, status=status.HTTP_400_BAD_REQUEST)

        try:
            service.delete_products(product_ids)
        except ProductPersistenceError:
            return Response(
                {"error": "Failed to delete the products"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"message": "Products deleted successfully"})

    # ------------------------------------------------------------------
    # Protocol errors
    # ------------------------------------------------------------------

    def http_method_not_allowed(self, request: Request, *args, **kwargs) -> Response:
        return Response(INVALID_REQUEST, status=status.HTTP_405_METHOD_NOT_ALLOWED)

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, (ParseError, UnsupportedMediaType)):
            logger.info("product_request.unparseable", detail=str(exc))
            return Response(INVALID_REQUEST, status=status.HTTP_400_BAD_REQUEST)
        return super().handle_exception(exc)


class ProductListView(ListAPIView):
    """GET /api/v1/products/"""

    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend]

    def get_queryset(self):
        return ProductService(repository=ProductDjangoRepository()).list_products()
