# products/services/django_repository.py

"""
DJANGO ORM PRODUCT REPOSITORY

- Product + ProductImage rows <-> ProductRecord
- Every DatabaseError leaves as StoreError with a SQLSTATE-like code:
  - Postgres: the driver's SQLSTATE (pgcode / sqlstate)
  - SQLite: "UNIQUE constraint failed" is mapped to UNIQUE_VIOLATION
- atomic() is django.db.transaction.atomic (nested calls become savepoints)
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Optional

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q

from products.models import Product, ProductImage
from products.services.errors import UNIQUE_VIOLATION, StoreError
from products.services.records import ImageRecord, ProductRecord
from products.services.repository import ProductRepository

SCALAR_FIELDS = (
    "title",
    "slug",
    "price",
    "description",
    "stock",
    "sizes",
    "gender",
    "tags",
)

# "UNIQUE constraint failed: products_product.slug"
SQLITE_UNIQUE_FAILED = re.compile(r"UNIQUE constraint failed: \w+\.(\w+)")


def _sqlstate(exc: DatabaseError) -> Optional[str]:
    cause = exc.__cause__
    code = getattr(cause, "pgcode", None) or getattr(cause, "sqlstate", None)
    if code:
        return code

    if isinstance(exc, IntegrityError) and SQLITE_UNIQUE_FAILED.search(str(exc)):
        return UNIQUE_VIOLATION

    return None


def _detail(exc: DatabaseError, keys: dict) -> str:
    """
    Postgres already reports "Key (column)=(value) already exists.";
    SQLite only names the column, so the value is filled in from keys.
    """
    diag = getattr(exc.__cause__, "diag", None)
    detail = getattr(diag, "message_detail", None)
    if detail:
        return detail

    match = SQLITE_UNIQUE_FAILED.search(str(exc))
    if match and match.group(1) in keys:
        column = match.group(1)
        return f"Key ({column})=({keys[column]}) already exists."

    return str(exc)


@contextmanager
def _store_errors(**keys):
    try:
        yield
    except DatabaseError as exc:
        raise StoreError(str(exc), code=_sqlstate(exc), detail=_detail(exc, keys)) from exc


def _to_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=product.id,
        title=product.title,
        slug=product.slug,
        price=product.price,
        description=product.description,
        stock=product.stock,
        sizes=list(product.sizes or []),
        gender=product.gender,
        tags=list(product.tags or []),
        images=[ImageRecord(id=image.id, url=image.url) for image in product.images.all()],
        owner_id=product.user_id,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


class DjangoProductRepository(ProductRepository):

    def _queryset(self):
        return Product.objects.prefetch_related("images").order_by("created_at", "id")

    def atomic(self):
        return transaction.atomic()

    def insert(self, record: ProductRecord) -> ProductRecord:
        with _store_errors(slug=record.slug):
            with transaction.atomic():
                product = Product.objects.create(
                    user_id=record.owner_id,
                    **{name: getattr(record, name) for name in SCALAR_FIELDS},
                )
                ProductImage.objects.bulk_create(
                    [ProductImage(product=product, url=image.url) for image in record.images]
                )

        return self.find_by_id(product.id)

    def save(self, record: ProductRecord) -> None:
        with _store_errors(slug=record.slug):
            with transaction.atomic():
                product = Product.objects.select_for_update().get(pk=record.id)
                for name in SCALAR_FIELDS:
                    setattr(product, name, getattr(record, name))
                product.user_id = record.owner_id
                product.save()

    def find_by_id(self, product_id) -> Optional[ProductRecord]:
        if not self.is_valid_id(product_id):
            return None

        with _store_errors():
            product = self._queryset().filter(pk=product_id).first()
        return _to_record(product) if product else None

    def find_by_slug_or_title(self, term: str) -> Optional[ProductRecord]:
        with _store_errors():
            product = self._queryset().filter(Q(title__iexact=term) | Q(slug=term)).first()
        return _to_record(product) if product else None

    def delete_owned_images(self, product_id) -> int:
        with _store_errors():
            deleted, _ = ProductImage.objects.filter(product_id=product_id).delete()
        return deleted

    def add_images(self, product_id, urls: list[str]) -> None:
        with _store_errors():
            ProductImage.objects.bulk_create(
                [ProductImage(product_id=product_id, url=url) for url in urls]
            )

    def count(self) -> int:
        with _store_errors():
            return Product.objects.count()

    def list_page(self, *, offset: int, limit: int) -> list[ProductRecord]:
        with _store_errors():
            products = list(self._queryset()[offset : offset + limit])
        return [_to_record(product) for product in products]

    def delete(self, product_id) -> None:
        with _store_errors():
            Product.objects.filter(pk=product_id).delete()

    def delete_all(self) -> int:
        with _store_errors():
            _, per_model = Product.objects.all().delete()
        return per_model.get(Product._meta.label, 0)
