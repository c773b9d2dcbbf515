# products/serializers/__init__.py

from .product import ProductPageSerializer, ProductSerializer

__all__ = [
    "ProductSerializer",
    "ProductPageSerializer",
]
