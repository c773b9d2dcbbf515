# products/tests/test_products.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase

from products.models import Product, ProductImage, derive_slug


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - Products can be created safely
    - Slug uniqueness is enforced by the database
    - Images are owned by their product (cascade delete)
    """

    def test_product_creation(self):
        """A valid product should be created successfully."""
        product = Product.objects.create(
            title="Men's Chill Crew Neck Sweatshirt",
            slug="mens-chill-crew-neck-sweatshirt",
            price=Decimal("75.00"),
            sizes=["S", "M"],
            gender=Product.Gender.MEN,
        )

        self.assertEqual(product.title, "Men's Chill Crew Neck Sweatshirt")
        self.assertEqual(product.stock, 0)
        self.assertEqual(product.tags, [])
        self.assertIsNotNone(product.id)

    def test_slug_must_be_unique(self):
        """Slug duplication must be rejected."""
        Product.objects.create(title="Beanie", slug="beanie", sizes=["M"], gender="unisex")

        with self.assertRaises(IntegrityError):
            Product.objects.create(title="Other Beanie", slug="beanie", sizes=["M"], gender="unisex")

    def test_clean_derives_slug_from_title(self):
        """An empty slug is filled from the title on full_clean()."""
        product = Product(title="  Kids Checkered Tee ", sizes=["XS"], gender="kid")
        product.full_clean()

        self.assertEqual(product.title, "Kids Checkered Tee")
        self.assertEqual(product.slug, "kids-checkered-tee")

    def test_unicode_slug_passes_full_clean(self):
        product = Product(title="日本 Tee", sizes=["M"], gender="unisex")
        product.full_clean()

        self.assertEqual(product.slug, "日本-tee")

    def test_clean_rejects_empty_sizes(self):
        product = Product(title="Cap", sizes=[], gender="unisex")

        with self.assertRaises(ValidationError) as ctx:
            product.full_clean()

        self.assertIn("sizes", ctx.exception.message_dict)

    def test_images_are_deleted_with_product(self):
        product = Product.objects.create(title="Hoodie", slug="hoodie", sizes=["M"], gender="women")
        ProductImage.objects.create(product=product, url="https://cdn.example.com/1.jpg")
        ProductImage.objects.create(product=product, url="https://cdn.example.com/2.jpg")

        product.delete()

        self.assertFalse(ProductImage.objects.exists())

    def test_product_string_representation(self):
        """__str__ should be human readable."""
        product = Product.objects.create(title="Cough Hat", slug="cough-hat", sizes=["M"], gender="men")

        self.assertIn("Cough Hat", str(product))


class DeriveSlugTests(TestCase):

    def test_punctuation_and_spaces_become_single_hyphens(self):
        self.assertEqual(derive_slug("Men's  Quilted Shirt  Jacket"), "men-s-quilted-shirt-jacket")
        self.assertEqual(derive_slug("A.B Tee"), "a-b-tee")
        self.assertEqual(derive_slug("  --Snake_case Tee!! "), "snake-case-tee")

    def test_titles_differing_in_punctuation_get_distinct_slugs(self):
        self.assertNotEqual(derive_slug("A.B Tee"), derive_slug("AB Tee"))

    def test_non_ascii_letters_are_kept(self):
        self.assertEqual(derive_slug("日本"), "日本")
        self.assertEqual(derive_slug("Camiseta Niño Azul"), "camiseta-niño-azul")

    def test_is_deterministic(self):
        self.assertEqual(derive_slug("Teslo Hoodie"), derive_slug("Teslo Hoodie"))

    def test_no_alphanumerics_gives_empty_slug(self):
        self.assertEqual(derive_slug("!!!"), "")
        self.assertEqual(derive_slug(None), "")
