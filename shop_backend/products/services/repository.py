# products/services/repository.py

"""Abstract repository for the product catalog.

The catalog service depends only on this interface. Concrete
implementations (Django ORM, in-memory) translate their own failures
into StoreError so the service can classify them without knowing the
storage engine.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Optional

from products.services.records import ProductRecord


class ProductRepository(ABC):

    @staticmethod
    def is_valid_id(value: Any) -> bool:
        """True only for canonical (hyphenated) UUID strings or UUID objects."""
        if isinstance(value, uuid.UUID):
            return True
        if not isinstance(value, str):
            return False
        try:
            return str(uuid.UUID(value)) == value.lower()
        except ValueError:
            return False

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Context manager: everything inside commits together or not at all."""

    @abstractmethod
    def insert(self, record: ProductRecord) -> ProductRecord:
        """Persist a new product and its images; return the stored record."""

    @abstractmethod
    def save(self, record: ProductRecord) -> None:
        """Persist scalar fields and owner of an existing product (images untouched)."""

    @abstractmethod
    def find_by_id(self, product_id) -> Optional[ProductRecord]:
        """Return the product with its images, or None."""

    @abstractmethod
    def find_by_slug_or_title(self, term: str) -> Optional[ProductRecord]:
        """Exact slug or case-insensitive title match; earliest created wins."""

    @abstractmethod
    def delete_owned_images(self, product_id) -> int:
        """Delete every image row owned by the product; return how many."""

    @abstractmethod
    def add_images(self, product_id, urls: list[str]) -> None:
        """Append image rows in the given order."""

    @abstractmethod
    def count(self) -> int:
        """Total number of products."""

    @abstractmethod
    def list_page(self, *, offset: int, limit: int) -> list[ProductRecord]:
        """Products in creation order (then id), with images."""

    @abstractmethod
    def delete(self, product_id) -> None:
        """Delete a product and its images."""

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every product and image; return the number of products deleted."""
