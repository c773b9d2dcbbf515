# products/services/memory_repository.py

"""
IN-MEMORY PRODUCT REPOSITORY

Pure-Python double of the Django repository for service tests and
scripts. Mirrors the store rules that matter to the catalog:
- slug uniqueness (StoreError with UNIQUE_VIOLATION, never overwrite)
- image rows live in their own table keyed by id
- atomic() snapshots state and restores it when the block raises
"""

from __future__ import annotations

import copy
import itertools
import uuid
from contextlib import contextmanager
from dataclasses import replace
from typing import Optional

from django.utils import timezone

from products.services.errors import UNIQUE_VIOLATION, StoreError
from products.services.records import ImageRecord, ProductRecord
from products.services.repository import ProductRepository


class InMemoryProductRepository(ProductRepository):

    def __init__(self):
        self._products: dict[uuid.UUID, ProductRecord] = {}
        self._order: dict[uuid.UUID, int] = {}
        # image id -> (product id, url)
        self._images: dict[int, tuple[uuid.UUID, str]] = {}
        self._product_seq = itertools.count(1)
        self._image_seq = itertools.count(1)

    # -----------------------------
    # Introspection (tests)
    # -----------------------------
    def image_rows(self) -> list[tuple[int, uuid.UUID, str]]:
        return [(image_id, pid, url) for image_id, (pid, url) in sorted(self._images.items())]

    # -----------------------------
    # Helpers
    # -----------------------------
    def _key(self, product_id) -> Optional[uuid.UUID]:
        if not self.is_valid_id(product_id):
            return None
        return product_id if isinstance(product_id, uuid.UUID) else uuid.UUID(product_id)

    def _check_slug(self, slug: str, *, exclude: Optional[uuid.UUID] = None) -> None:
        for pid, existing in self._products.items():
            if pid != exclude and existing.slug == slug:
                raise StoreError(
                    "duplicate key value violates unique constraint",
                    code=UNIQUE_VIOLATION,
                    detail=f"Key (slug)=({slug}) already exists.",
                )

    def _with_images(self, record: ProductRecord) -> ProductRecord:
        images = [
            ImageRecord(id=image_id, url=url)
            for image_id, (pid, url) in sorted(self._images.items())
            if pid == record.id
        ]
        return replace(copy.deepcopy(record), images=images)

    def _ordered(self) -> list[ProductRecord]:
        return sorted(self._products.values(), key=lambda r: self._order[r.id])

    # -----------------------------
    # ProductRepository
    # -----------------------------
    @contextmanager
    def atomic(self):
        snapshot = copy.deepcopy((self._products, self._order, self._images))
        try:
            yield
        except BaseException:
            self._products, self._order, self._images = snapshot
            raise

    def insert(self, record: ProductRecord) -> ProductRecord:
        self._check_slug(record.slug)

        now = timezone.now()
        stored = replace(
            copy.deepcopy(record),
            id=record.id or uuid.uuid4(),
            images=[],
            created_at=now,
            updated_at=now,
        )
        self._products[stored.id] = stored
        self._order[stored.id] = next(self._product_seq)
        self.add_images(stored.id, record.image_urls)
        return self._with_images(stored)

    def save(self, record: ProductRecord) -> None:
        key = self._key(record.id)
        if key not in self._products:
            raise StoreError(f"Product {record.id} does not exist")

        self._check_slug(record.slug, exclude=key)
        current = self._products[key]
        self._products[key] = replace(
            copy.deepcopy(record),
            images=[],
            created_at=current.created_at,
            updated_at=timezone.now(),
        )

    def find_by_id(self, product_id) -> Optional[ProductRecord]:
        key = self._key(product_id)
        record = self._products.get(key) if key else None
        return self._with_images(record) if record else None

    def find_by_slug_or_title(self, term: str) -> Optional[ProductRecord]:
        needle = term.lower()
        for record in self._ordered():
            if record.slug == term or record.title.lower() == needle:
                return self._with_images(record)
        return None

    def delete_owned_images(self, product_id) -> int:
        key = self._key(product_id)
        owned = [image_id for image_id, (pid, _) in self._images.items() if pid == key]
        for image_id in owned:
            del self._images[image_id]
        return len(owned)

    def add_images(self, product_id, urls: list[str]) -> None:
        key = self._key(product_id)
        if key not in self._products:
            raise StoreError(f"Product {product_id} does not exist")
        for url in urls:
            self._images[next(self._image_seq)] = (key, url)

    def count(self) -> int:
        return len(self._products)

    def list_page(self, *, offset: int, limit: int) -> list[ProductRecord]:
        return [self._with_images(r) for r in self._ordered()[offset : offset + limit]]

    def delete(self, product_id) -> None:
        key = self._key(product_id)
        if self._products.pop(key, None) is not None:
            self._order.pop(key, None)
            self.delete_owned_images(key)

    def delete_all(self) -> int:
        deleted = len(self._products)
        self._products.clear()
        self._order.clear()
        self._images.clear()
        return deleted
