# products/services/validation.py

"""
CATALOG INPUT VALIDATION

One function per input shape. Each returns (cleaned_data, errors) where
errors is a flat list of FieldError. Nothing here touches the store.

Shapes:
- create:     {title, price?, description?, slug?, stock?, sizes[], gender, tags?[], images?[]}
- update:     any subset of the create shape
- pagination: {page?, per_page?}
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from products.models import Product, derive_slug
from products.services.errors import FieldError

UNKNOWN_FIELD = "This field is not allowed."


class ProductInputSerializer(serializers.Serializer):
    title = serializers.CharField(min_length=1, max_length=255)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
    )
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    slug = serializers.CharField(required=False, max_length=255)
    stock = serializers.IntegerField(required=False, min_value=0)
    sizes = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    gender = serializers.ChoiceField(choices=Product.Gender.choices)
    tags = serializers.ListField(child=serializers.CharField(), required=False)
    images = serializers.ListField(child=serializers.CharField(), required=False)

    def validate_slug(self, value):
        slug = derive_slug(value)
        if not slug:
            raise serializers.ValidationError("Slug must contain at least one letter or digit.")
        return slug

    def validate_tags(self, value):
        # set semantics, first occurrence wins
        return list(dict.fromkeys(value))

    def validate(self, attrs):
        unknown = set(self.initial_data) - set(self.fields)
        if unknown:
            raise serializers.ValidationError({name: [UNKNOWN_FIELD] for name in sorted(unknown)})
        return attrs


class PaginationInputSerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    per_page = serializers.IntegerField(required=False, min_value=1)


def flatten_errors(errors, prefix: str = "") -> list[FieldError]:
    """
    DRF error structures -> flat FieldError list.
    List-item errors ({0: [...]}) become "field.0".
    """
    flat: list[FieldError] = []

    if isinstance(errors, dict):
        for key, detail in errors.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            flat.extend(flatten_errors(detail, name))
    elif isinstance(errors, (list, tuple)):
        for detail in errors:
            if isinstance(detail, (dict, list, tuple)):
                flat.extend(flatten_errors(detail, prefix))
            else:
                flat.append(FieldError(prefix or "non_field_errors", str(detail)))
    else:
        flat.append(FieldError(prefix or "non_field_errors", str(errors)))

    return flat


def _run(serializer: serializers.Serializer) -> tuple[dict, list[FieldError]]:
    if serializer.is_valid():
        return dict(serializer.validated_data), []
    return {}, flatten_errors(serializer.errors)


def _as_mapping(payload) -> tuple[dict | None, list[FieldError]]:
    if payload is None:
        return {}, []
    if not hasattr(payload, "keys"):
        return None, [FieldError("non_field_errors", "Expected an object.")]
    return payload, []


def validate_product_create(payload) -> tuple[dict, list[FieldError]]:
    data, errors = _as_mapping(payload)
    if errors:
        return {}, errors

    cleaned, errors = _run(ProductInputSerializer(data=data))
    if errors:
        return {}, errors

    if not cleaned.get("slug"):
        slug = derive_slug(cleaned["title"])
        if not slug:
            return {}, [FieldError("title", "Title must contain at least one letter or digit.")]
        cleaned["slug"] = slug

    return cleaned, []


def validate_product_update(payload) -> tuple[dict, list[FieldError]]:
    data, errors = _as_mapping(payload)
    if errors:
        return {}, errors

    return _run(ProductInputSerializer(data=data, partial=True))


def validate_pagination(params, *, default_per_page: int, max_per_page: int) -> tuple[dict, list[FieldError]]:
    data, errors = _as_mapping(params)
    if errors:
        return {}, errors

    cleaned, errors = _run(PaginationInputSerializer(data=data))
    if errors:
        return {}, errors

    per_page = cleaned.get("per_page") or default_per_page
    if per_page > max_per_page:
        return {}, [FieldError("per_page", f"Ensure this value is less than or equal to {max_per_page}.")]

    cleaned["per_page"] = per_page
    return cleaned, []
