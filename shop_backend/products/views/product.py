# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public catalog browsing (list + dual-mode lookup), AllowAny
- Product creation for any authenticated user
- Update / delete restricted to admins

All business rules live in CatalogService; this layer only maps HTTP to
service calls. Catalog errors are rendered by backend.exceptions.
"""

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from products.serializers import ProductPageSerializer, ProductSerializer
from products.services import get_catalog_service
from products.services.validation import ProductInputSerializer
from users.permissions import IsAdmin

TERM_PARAMETER = OpenApiParameter(
    name="term",
    type=str,
    location=OpenApiParameter.PATH,
    description="Product UUID, slug, or title (case-insensitive).",
)


class ProductViewSet(viewsets.ViewSet):
    """
    Product endpoints.

    Public:
    - GET  /products/?page=<n>&per_page=<n>
    - GET  /products/<uuid | slug | title>/

    Authenticated:
    - POST /products/

    Admin:
    - PATCH  /products/<uuid>/
    - DELETE /products/<uuid | slug | title>/
    """

    lookup_field = "term"
    lookup_value_regex = "[^/]+"

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        if self.action == "create":
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsAdmin()]

    @property
    def catalog(self):
        return get_catalog_service()

    @extend_schema(
        parameters=[
            OpenApiParameter(name="page", type=int, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="per_page", type=int, location=OpenApiParameter.QUERY, required=False),
        ],
        responses={
            200: ProductPageSerializer,
            400: OpenApiResponse(description="Invalid pagination parameters"),
        },
        description="Paginated catalog in creation order.",
    )
    def list(self, request):
        page = self.catalog.list(request.query_params)
        return Response(ProductPageSerializer(page).data)

    @extend_schema(
        request=ProductInputSerializer,
        responses={
            201: ProductSerializer,
            400: OpenApiResponse(description="Validation error or duplicate slug"),
        },
        description="Create a product owned by the authenticated user.",
    )
    def create(self, request):
        product = self.catalog.create(request.data, user=request.user)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[TERM_PARAMETER],
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def retrieve(self, request, term=None):
        product = self.catalog.find_one_plain(term)
        return Response(ProductSerializer(product).data)

    @extend_schema(
        request=ProductInputSerializer(partial=True),
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(description="Validation error or duplicate slug"),
            404: OpenApiResponse(description="Product not found"),
        },
        description="Patch a product; an images list replaces all existing images.",
    )
    def partial_update(self, request, term=None):
        product = self.catalog.update(term, request.data, user=request.user)
        return Response(ProductSerializer(product).data)

    @extend_schema(
        parameters=[TERM_PARAMETER],
        responses={
            204: OpenApiResponse(description="Deleted"),
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def destroy(self, request, term=None):
        self.catalog.remove(term)
        return Response(status=status.HTTP_204_NO_CONTENT)
