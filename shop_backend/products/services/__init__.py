from django.conf import settings

from .catalog import CatalogService
from .django_repository import DjangoProductRepository
from .errors import (
    CatalogError,
    CatalogInternalError,
    DuplicateProductError,
    FieldError,
    ProductNotFoundError,
    ProductValidationError,
)

__all__ = [
    "CatalogService",
    "DjangoProductRepository",
    "CatalogError",
    "CatalogInternalError",
    "DuplicateProductError",
    "FieldError",
    "ProductNotFoundError",
    "ProductValidationError",
    "get_catalog_service",
]


def get_catalog_service() -> CatalogService:
    """Catalog service wired to the Django ORM store and configured page sizes."""
    return CatalogService(
        DjangoProductRepository(),
        default_per_page=settings.CATALOG_DEFAULT_PER_PAGE,
        max_per_page=settings.CATALOG_MAX_PER_PAGE,
    )
