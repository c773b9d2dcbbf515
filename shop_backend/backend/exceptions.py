# backend/exceptions.py

"""
API EXCEPTION HANDLER

Catalog errors -> HTTP:
- ProductValidationError  400  {"detail", "errors": [{"field", "message"}]}
- DuplicateProductError   400  {"detail": <store detail naming the key>}
- ProductNotFoundError    404  {"detail": "Product with <term> not found"}
- CatalogInternalError    500  {"detail": "Unexpected error, check server logs"}

Everything else goes through DRF's default handler.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from products.services.errors import (
    CatalogInternalError,
    DuplicateProductError,
    ProductNotFoundError,
    ProductValidationError,
)


def api_exception_handler(exc, context):
    if isinstance(exc, ProductValidationError):
        return Response(
            {
                "detail": "Invalid product data",
                "errors": [error.as_dict() for error in exc.errors],
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, DuplicateProductError):
        return Response({"detail": exc.detail}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, ProductNotFoundError):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, CatalogInternalError):
        return Response(
            {"detail": str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return exception_handler(exc, context)
