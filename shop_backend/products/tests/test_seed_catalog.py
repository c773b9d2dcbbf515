from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from products.management.commands.seed_catalog import SEED_ADMIN_EMAIL, SEED_PRODUCTS
from products.models import Product, ProductImage

User = get_user_model()


class SeedCatalogCommandTests(TestCase):
    """
    seed_catalog management command.

    GUARANTEES:
    - Existing products are wiped first
    - Seeded products are owned by the seed admin
    - Re-running does not duplicate the admin or the products
    """

    def _run(self, *args):
        out = StringIO()
        with self.assertLogs("products.services.catalog", level="WARNING"):
            call_command("seed_catalog", *args, stdout=out)
        return out.getvalue()

    def test_seeds_products_for_seed_admin(self):
        output = self._run()

        admin = User.objects.get(email=SEED_ADMIN_EMAIL)
        self.assertEqual(admin.role, "admin")
        self.assertEqual(Product.objects.filter(user=admin).count(), len(SEED_PRODUCTS))
        self.assertEqual(
            ProductImage.objects.count(),
            sum(len(p["images"]) for p in SEED_PRODUCTS),
        )
        self.assertIn(f"Seeded {len(SEED_PRODUCTS)} products.", output)

    def test_rerun_replaces_catalog(self):
        self._run()
        output = self._run()

        self.assertIn(f"Deleted {len(SEED_PRODUCTS)} products.", output)
        self.assertEqual(Product.objects.count(), len(SEED_PRODUCTS))
        self.assertEqual(User.objects.filter(email=SEED_ADMIN_EMAIL).count(), 1)

    def test_flush_only(self):
        self._run()

        self._run("--flush-only")

        self.assertFalse(Product.objects.exists())
        self.assertFalse(ProductImage.objects.exists())
