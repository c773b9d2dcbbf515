# products/models/product.py

import re
import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


SLUG_SEPARATORS = re.compile(r"[\W_]+")


def derive_slug(value: str) -> str:
    """
    Lowercase; every run of whitespace, punctuation or underscores becomes a
    single hyphen (leading/trailing hyphens dropped). Letters and digits of
    any script are kept, so "A.B Tee" -> "a-b-tee" and "日本 Tee" -> "日本-tee".
    Deterministic: the same title always yields the same slug.
    """
    return SLUG_SEPARATORS.sub("-", (value or "").lower()).strip("-")


class Product(models.Model):
    """
    Represents a catalog product.

    IDENTITY:
    - id is a UUID generated at creation (never changes)
    - slug is unique across the catalog (database constraint)
    - title is NOT unique; lookups by title take the earliest product

    OWNERSHIP:
    - images are owned exclusively (cascade delete)
    - user is the last acting user (create or update); deleting the user
      keeps the product
    """

    class Gender(models.TextChoices):
        MEN = "men", "Men"
        WOMEN = "women", "Women"
        KID = "kid", "Kid"
        UNISEX = "unisex", "Unisex"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=255, unique=True, blank=True, allow_unicode=True)

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    description = models.TextField(null=True, blank=True)
    stock = models.PositiveIntegerField(default=0)

    sizes = models.JSONField(default=list)
    gender = models.CharField(max_length=16, choices=Gender.choices)
    tags = models.JSONField(default=list, blank=True)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["created_at", "id"], name="product_created_order_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.slug})"

    def clean(self):
        self.title = (self.title or "").strip()
        if not self.title:
            raise ValidationError({"title": "Title is required"})

        if not self.slug:
            self.slug = derive_slug(self.title)

        if not isinstance(self.sizes, list) or not self.sizes:
            raise ValidationError({"sizes": "At least one size is required"})

        if self.price is None or Decimal(self.price) < Decimal("0.00"):
            raise ValidationError({"price": "Price must be non-negative"})


class ProductImage(models.Model):
    """
    Image URL owned by exactly one product.
    Insertion order (id) is the display order.
    """

    url = models.TextField()
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="images",
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.url
