# products/services/errors.py

"""
CATALOG SERVICE ERRORS

Taxonomy:
- ProductValidationError  client input rejected (field-level list), never logged as a fault
- DuplicateProductError   unique constraint violated in the store (e.g. slug)
- ProductNotFoundError    identifier / slug / title resolves to nothing
- CatalogInternalError    any other store failure (logged, surfaced opaquely)

Repositories raise StoreError carrying the store's error code.
classify_store_error() is the single place that turns a write-path failure
into DuplicateProductError or CatalogInternalError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (Postgres); the other stores map onto it.
UNIQUE_VIOLATION = "23505"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class StoreError(Exception):
    """Raised by repositories when the underlying store rejects an operation."""

    def __init__(self, message: str, *, code: str | None = None, detail: str | None = None):
        super().__init__(message)
        self.code = code
        self.detail = detail or message


class CatalogError(Exception):
    """Base exception for all catalog service failures."""


class ProductValidationError(CatalogError):
    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(summary or "Invalid product data")


class DuplicateProductError(CatalogError):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ProductNotFoundError(CatalogError):
    def __init__(self, term):
        super().__init__(f"Product with {term} not found")
        self.term = term


class CatalogInternalError(CatalogError):
    def __init__(self):
        super().__init__("Unexpected error, check server logs")


def classify_store_error(exc: Exception, *, operation: str) -> CatalogError:
    """
    Map a failure from a catalog write/read path to the public taxonomy.

    Only a StoreError with the unique-violation code becomes a duplicate;
    everything else is internal and logged with its traceback.
    """
    if isinstance(exc, StoreError) and exc.code == UNIQUE_VIOLATION:
        logger.info(
            "Catalog %s rejected: duplicate key",
            operation,
            extra={"operation": operation, "detail": exc.detail},
        )
        return DuplicateProductError(exc.detail)

    logger.error(
        "Catalog %s failed",
        operation,
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"operation": operation},
    )
    return CatalogInternalError()
