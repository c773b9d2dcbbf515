# products/urls.py

"""
PRODUCTS URLS

Purpose:
- Register catalog routes under /api/products/
- SimpleRouter (no router root view: the empty prefix IS the list route)
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import ProductViewSet

router = SimpleRouter()

router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
