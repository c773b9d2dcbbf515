# products/services/records.py

"""
CATALOG RECORDS

Plain data structures exchanged between the catalog service and its
repositories. No ORM objects cross this boundary.

The external shape of a product is produced ONLY by to_plain(): images are
always a flat list of URL strings there.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

ZERO = Decimal("0.00")

PATCHABLE_FIELDS = (
    "title",
    "slug",
    "price",
    "description",
    "stock",
    "sizes",
    "gender",
    "tags",
)


@dataclass
class ImageRecord:
    url: str
    id: Optional[int] = None


@dataclass
class ProductRecord:
    title: str
    slug: str
    gender: str
    sizes: list[str] = field(default_factory=list)
    price: Decimal = ZERO
    description: Optional[str] = None
    stock: int = 0
    tags: list[str] = field(default_factory=list)
    images: list[ImageRecord] = field(default_factory=list)
    owner_id: Any = None
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in self.images]

    def merged(self, patch: dict) -> "ProductRecord":
        """Copy with patch fields applied; keys outside PATCHABLE_FIELDS are ignored."""
        changes = {key: value for key, value in patch.items() if key in PATCHABLE_FIELDS}
        return replace(self, **changes)


def to_plain(record: ProductRecord) -> dict:
    return {
        "id": str(record.id) if record.id is not None else None,
        "title": record.title,
        "slug": record.slug,
        "price": record.price,
        "description": record.description,
        "stock": record.stock,
        "sizes": list(record.sizes),
        "gender": record.gender,
        "tags": list(record.tags),
        "images": record.image_urls,
        "user": str(record.owner_id) if record.owner_id is not None else None,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }
