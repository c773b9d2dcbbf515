# products/services/catalog.py

"""
CATALOG APPLICATION SERVICE

Operations:
- create(payload, user)          validate -> insert product + images atomically
- list(params)                   {count, products} page in creation order
- find_one(term)                 dual-mode lookup, full record with images
- find_one_plain(term)           same, external (flattened) shape
- update(product_id, patch, user) atomic merge / image replacement / owner re-stamp
- remove(term)                   dual-mode resolve, cascade delete
- delete_all()                   every product + image (admin/seed only)

Rules:
- Input is validated before any repository call.
- Every non-validation failure on a write path goes through
  classify_store_error() (duplicate vs internal).
- The acting user is trusted as supplied; identity maps it to the owner
  reference stored on the product.

Lookup order under duplicate titles:
- Slug is unique, title is not. A non-UUID term that matches several titles
  (case-insensitively) resolves to the earliest created product.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from products.services.errors import (
    CatalogError,
    FieldError,
    ProductNotFoundError,
    ProductValidationError,
    classify_store_error,
)
from products.services.records import ImageRecord, ProductRecord, to_plain
from products.services.repository import ProductRepository
from products.services.validation import (
    validate_pagination,
    validate_product_create,
    validate_product_update,
)

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 5
MAX_PER_PAGE = 100


def user_reference(user) -> Any:
    """Owner reference for an acting user (its primary key, or the value itself)."""
    if user is None:
        return None
    return getattr(user, "pk", user)


def _validated(result) -> dict:
    data, errors = result
    if errors:
        raise ProductValidationError(errors)
    return data


class CatalogService:

    def __init__(
        self,
        repository: ProductRepository,
        identity: Callable[[Any], Any] = user_reference,
        *,
        default_per_page: int = DEFAULT_PER_PAGE,
        max_per_page: int = MAX_PER_PAGE,
    ):
        self.repository = repository
        self.identity = identity
        self.default_per_page = default_per_page
        self.max_per_page = max_per_page

    # -----------------------------
    # CREATE
    # -----------------------------
    def create(self, payload, *, user=None) -> dict:
        data = _validated(validate_product_create(payload))
        urls = data.pop("images", [])

        record = ProductRecord(
            **data,
            images=[ImageRecord(url=url) for url in urls],
            owner_id=self.identity(user),
        )

        try:
            created = self.repository.insert(record)
        except CatalogError:
            raise
        except Exception as exc:
            raise classify_store_error(exc, operation="create") from exc

        logger.info(
            "Product created",
            extra={"product_id": str(created.id), "slug": created.slug, "images": len(urls)},
        )
        return to_plain(created)

    # -----------------------------
    # LIST
    # -----------------------------
    def list(self, params=None) -> dict:
        data = _validated(
            validate_pagination(
                params,
                default_per_page=self.default_per_page,
                max_per_page=self.max_per_page,
            )
        )
        page, per_page = data["page"], data["per_page"]
        offset = (page - 1) * per_page

        try:
            total = self.repository.count()
            records = self.repository.list_page(offset=offset, limit=per_page)
        except Exception as exc:
            raise classify_store_error(exc, operation="list") from exc

        return {
            "count": total,
            "products": [to_plain(record) for record in records],
        }

    # -----------------------------
    # LOOKUP (dual-mode)
    # -----------------------------
    def find_one(self, term) -> ProductRecord:
        term = str(term)

        try:
            if self.repository.is_valid_id(term):
                record = self.repository.find_by_id(term)
            else:
                record = self.repository.find_by_slug_or_title(term)
        except Exception as exc:
            raise classify_store_error(exc, operation="lookup") from exc

        if record is None:
            raise ProductNotFoundError(term)
        return record

    def find_one_plain(self, term) -> dict:
        return to_plain(self.find_one(term))

    # -----------------------------
    # UPDATE (atomic)
    # -----------------------------
    def update(self, product_id, payload, *, user=None) -> dict:
        if not self.repository.is_valid_id(product_id):
            raise ProductValidationError([FieldError("id", "Must be a valid UUID.")])

        data = _validated(validate_product_update(payload))
        urls = data.pop("images", None)

        try:
            with self.repository.atomic():
                current = self.repository.find_by_id(product_id)
                if current is None:
                    raise ProductNotFoundError(product_id)

                updated = current.merged(data)
                updated.owner_id = self.identity(user)
                self.repository.save(updated)

                if urls is not None:
                    self.repository.delete_owned_images(current.id)
                    self.repository.add_images(current.id, urls)
        except CatalogError:
            raise
        except Exception as exc:
            raise classify_store_error(exc, operation="update") from exc

        logger.info(
            "Product updated",
            extra={
                "product_id": str(product_id),
                "fields": sorted(data),
                "images_replaced": urls is not None,
            },
        )
        return self.find_one_plain(product_id)

    # -----------------------------
    # DELETE
    # -----------------------------
    def remove(self, term) -> None:
        try:
            with self.repository.atomic():
                record = self.find_one(term)
                self.repository.delete(record.id)
        except CatalogError:
            raise
        except Exception as exc:
            raise classify_store_error(exc, operation="remove") from exc

        logger.info("Product removed", extra={"product_id": str(record.id)})

    def delete_all(self) -> int:
        try:
            deleted = self.repository.delete_all()
        except Exception as exc:
            raise classify_store_error(exc, operation="delete_all") from exc

        logger.warning("All products deleted", extra={"deleted": deleted})
        return deleted
