"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .product import Product, ProductImage, derive_slug

__all__ = [
    "Product",
    "ProductImage",
    "derive_slug",
]
