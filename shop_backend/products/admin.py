# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules:

- Slug is derived from the title when left empty (Product.clean()).
- Images are edited inline and deleted with their product.
- The owner (user) is stamped with the admin performing the save,
  matching the API's create/update behavior.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product, ProductImage


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = ("url",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "price", "stock", "gender", "user", "created_at")
    list_filter = ("gender",)
    search_fields = ("title", "slug")
    readonly_fields = ("id", "user", "created_at", "updated_at")
    inlines = [ProductImageInline]

    fieldsets = (
        (None, {"fields": ("id", "title", "slug", "description")}),
        ("Inventory", {"fields": ("price", "stock", "sizes", "gender", "tags")}),
        ("Audit", {"fields": ("user", "created_at", "updated_at")}),
    )

    def save_model(self, request, obj, form, change):
        obj.user = request.user
        super().save_model(request, obj, form, change)
