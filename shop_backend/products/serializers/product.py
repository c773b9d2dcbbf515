# products/serializers/product.py

"""
PRODUCT SERIALIZERS (OUTPUT + SCHEMA)

Purpose:
- Render the plain product shape produced by the catalog service
  (images as URL strings, owner as a user id).
- Describe request/response bodies for OpenAPI.

Input validation lives in products.services.validation.
"""

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    title = serializers.CharField()
    slug = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    description = serializers.CharField(allow_null=True, allow_blank=True)
    stock = serializers.IntegerField()
    sizes = serializers.ListField(child=serializers.CharField())
    gender = serializers.ChoiceField(choices=Product.Gender.choices)
    tags = serializers.ListField(child=serializers.CharField())
    images = serializers.ListField(child=serializers.CharField())
    user = serializers.CharField(allow_null=True, read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class ProductPageSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    products = ProductSerializer(many=True)
