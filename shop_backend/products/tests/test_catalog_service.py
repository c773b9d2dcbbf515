# products/tests/test_catalog_service.py

import uuid
from decimal import Decimal
from types import SimpleNamespace
from unittest import mock

from django.test import SimpleTestCase

from products.services.catalog import CatalogService
from products.services.errors import (
    CatalogInternalError,
    DuplicateProductError,
    ProductNotFoundError,
    ProductValidationError,
    StoreError,
)
from products.services.memory_repository import InMemoryProductRepository


def product_payload(title="Teslo Hoodie", **overrides):
    payload = {"title": title, "sizes": ["S", "M"], "gender": "unisex"}
    payload.update(overrides)
    return payload


class CatalogServiceTestCase(SimpleTestCase):

    def setUp(self):
        self.repository = InMemoryProductRepository()
        self.catalog = CatalogService(self.repository)
        self.alice = SimpleNamespace(pk="alice")
        self.bob = SimpleNamespace(pk="bob")


class CatalogCreateTests(CatalogServiceTestCase):
    """
    Product creation.

    GUARANTEES:
    - Output is the plain shape (images as URLs, owner as reference)
    - Duplicate slugs are reported, never overwritten
    - Invalid input never reaches the store
    """

    def test_create_returns_plain_product(self):
        product = self.catalog.create(
            product_payload(images=["a.jpg", "b.jpg"], tags=["hoodie"]),
            user=self.alice,
        )

        self.assertTrue(self.repository.is_valid_id(product["id"]))
        self.assertEqual(product["slug"], "teslo-hoodie")
        self.assertEqual(product["images"], ["a.jpg", "b.jpg"])
        self.assertEqual(product["user"], "alice")
        self.assertEqual(product["price"], Decimal("0.00"))
        self.assertEqual(product["stock"], 0)
        self.assertIsNone(product["description"])

    def test_same_title_twice_is_duplicate(self):
        self.catalog.create(product_payload("Teslo Hoodie"), user=self.alice)

        with self.assertLogs("products.services.errors", level="INFO"):
            with self.assertRaises(DuplicateProductError) as ctx:
                self.catalog.create(product_payload("TESLO HOODIE"), user=self.bob)

        self.assertEqual(ctx.exception.detail, "Key (slug)=(teslo-hoodie) already exists.")
        self.assertEqual(self.repository.count(), 1)
        self.assertEqual(self.catalog.find_one("teslo-hoodie").owner_id, "alice")

    def test_titles_differing_in_punctuation_are_distinct(self):
        first = self.catalog.create(product_payload("A.B Tee"), user=self.alice)
        second = self.catalog.create(product_payload("AB Tee"), user=self.alice)

        self.assertEqual(first["slug"], "a-b-tee")
        self.assertEqual(second["slug"], "ab-tee")
        self.assertEqual(self.repository.count(), 2)

    def test_non_ascii_title(self):
        product = self.catalog.create(product_payload("日本"), user=self.alice)

        self.assertEqual(product["slug"], "日本")
        self.assertEqual(self.catalog.find_one_plain("日本")["id"], product["id"])

    def test_non_ascii_explicit_slug(self):
        product = self.catalog.create(product_payload("Tee", slug="Camiseta Niño"), user=self.alice)

        self.assertEqual(product["slug"], "camiseta-niño")
        self.assertEqual(self.catalog.find_one_plain("camiseta-niño")["id"], product["id"])

    def test_invalid_payload_is_not_stored(self):
        with mock.patch.object(self.repository, "insert") as insert:
            with self.assertRaises(ProductValidationError) as ctx:
                self.catalog.create({"title": "Hoodie"}, user=self.alice)

        insert.assert_not_called()
        fields = {error.field for error in ctx.exception.errors}
        self.assertEqual(fields, {"sizes", "gender"})

    def test_unexpected_store_failure_is_internal(self):
        with mock.patch.object(self.repository, "insert", side_effect=RuntimeError("disk full")):
            with self.assertLogs("products.services.errors", level="ERROR"):
                with self.assertRaises(CatalogInternalError):
                    self.catalog.create(product_payload(), user=self.alice)

    def test_created_product_round_trips(self):
        created = self.catalog.create(product_payload(images=["a.jpg"]), user=self.alice)

        self.assertEqual(self.catalog.find_one_plain(created["id"]), created)


class CatalogLookupTests(CatalogServiceTestCase):
    """
    Dual-mode lookup.

    GUARANTEES:
    - UUID terms resolve by id only
    - Other terms match slug exactly or title case-insensitively
    - Duplicate titles resolve to the earliest product
    """

    def test_find_by_id(self):
        created = self.catalog.create(product_payload(), user=self.alice)

        self.assertEqual(str(self.catalog.find_one(created["id"]).id), created["id"])

    def test_find_by_slug(self):
        created = self.catalog.create(product_payload(), user=self.alice)

        self.assertEqual(self.catalog.find_one_plain("teslo-hoodie")["id"], created["id"])

    def test_find_by_title_is_case_insensitive(self):
        created = self.catalog.create(product_payload(), user=self.alice)

        self.assertEqual(self.catalog.find_one_plain("TESLO hoodie")["id"], created["id"])

    def test_duplicate_titles_resolve_to_earliest(self):
        first = self.catalog.create(product_payload("Beanie", slug="beanie-black"), user=self.alice)
        self.catalog.create(product_payload("Beanie", slug="beanie-white"), user=self.alice)

        self.assertEqual(self.catalog.find_one_plain("beanie")["id"], first["id"])

    def test_unknown_uuid_is_not_found(self):
        self.catalog.create(product_payload(), user=self.alice)
        missing = str(uuid.uuid4())

        with self.assertRaises(ProductNotFoundError) as ctx:
            self.catalog.find_one(missing)

        self.assertEqual(str(ctx.exception), f"Product with {missing} not found")

    def test_unknown_slug_is_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            self.catalog.find_one("no-such-product")


class CatalogListTests(CatalogServiceTestCase):
    """
    Pagination.

    GUARANTEES:
    - Pages partition the catalog in creation order
    - count is the total, independent of the page
    - Listing has no side effects
    """

    def setUp(self):
        super().setUp()
        self.created = [
            self.catalog.create(product_payload(f"Product {n}"), user=self.alice)
            for n in range(7)
        ]

    def test_default_page_size(self):
        page = self.catalog.list()

        self.assertEqual(page["count"], 7)
        self.assertEqual(len(page["products"]), 5)

    def test_pages_partition_catalog_in_creation_order(self):
        pages = [self.catalog.list({"page": n})["products"] for n in (1, 2, 3)]

        self.assertEqual([len(p) for p in pages], [5, 2, 0])
        listed = [product["id"] for page in pages for product in page]
        self.assertEqual(listed, [product["id"] for product in self.created])

    def test_per_page(self):
        page = self.catalog.list({"page": 2, "per_page": 3})

        self.assertEqual([p["title"] for p in page["products"]], ["Product 3", "Product 4", "Product 5"])

    def test_listing_is_idempotent(self):
        self.assertEqual(self.catalog.list({"page": 1}), self.catalog.list({"page": 1}))

    def test_invalid_pagination(self):
        with self.assertRaises(ProductValidationError):
            self.catalog.list({"per_page": 0})

    def test_configured_default_page_size(self):
        catalog = CatalogService(self.repository, default_per_page=2, max_per_page=3)

        self.assertEqual(len(catalog.list()["products"]), 2)
        with self.assertRaises(ProductValidationError):
            catalog.list({"per_page": 4})


class CatalogUpdateTests(CatalogServiceTestCase):
    """
    Atomic update.

    GUARANTEES:
    - Only valid UUIDs are accepted as identifiers
    - An images list replaces every existing image row
    - The acting user becomes the owner, even for an empty patch
    - Any failure leaves the product exactly as it was
    """

    def setUp(self):
        super().setUp()
        self.product = self.catalog.create(
            product_payload(images=["a.jpg", "b.jpg"], stock=3),
            user=self.alice,
        )

    def test_non_uuid_identifier_is_rejected(self):
        with self.assertRaises(ProductValidationError) as ctx:
            self.catalog.update("teslo-hoodie", {"stock": 1}, user=self.bob)

        self.assertEqual([e.field for e in ctx.exception.errors], ["id"])

    def test_missing_product_is_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            self.catalog.update(str(uuid.uuid4()), {"stock": 1}, user=self.bob)

    def test_scalar_fields_are_merged(self):
        updated = self.catalog.update(self.product["id"], {"stock": 9, "price": "12.50"}, user=self.alice)

        self.assertEqual(updated["stock"], 9)
        self.assertEqual(updated["price"], Decimal("12.50"))
        self.assertEqual(updated["title"], "Teslo Hoodie")
        self.assertEqual(updated["images"], ["a.jpg", "b.jpg"])

    def test_images_are_replaced(self):
        old_rows = {row[0] for row in self.repository.image_rows()}

        updated = self.catalog.update(self.product["id"], {"images": ["c.jpg"]}, user=self.alice)

        self.assertEqual(updated["images"], ["c.jpg"])
        new_rows = {row[0] for row in self.repository.image_rows()}
        self.assertEqual(len(new_rows), 1)
        self.assertFalse(old_rows & new_rows)

    def test_empty_images_list_clears_images(self):
        updated = self.catalog.update(self.product["id"], {"images": []}, user=self.alice)

        self.assertEqual(updated["images"], [])
        self.assertEqual(self.repository.image_rows(), [])

    def test_empty_patch_restamps_owner(self):
        updated = self.catalog.update(self.product["id"], {}, user=self.bob)

        self.assertEqual(updated["user"], "bob")
        self.assertEqual(updated["stock"], 3)

    def test_slug_collision_is_duplicate(self):
        self.catalog.create(product_payload("Beanie"), user=self.alice)

        with self.assertLogs("products.services.errors", level="INFO"):
            with self.assertRaises(DuplicateProductError):
                self.catalog.update(self.product["id"], {"slug": "beanie"}, user=self.bob)

        self.assertEqual(self.catalog.find_one_plain(self.product["id"]), self.product)

    def test_failure_while_adding_images_rolls_back(self):
        rows_before = self.repository.image_rows()

        with mock.patch.object(self.repository, "add_images", side_effect=StoreError("disk full")):
            with self.assertLogs("products.services.errors", level="ERROR"):
                with self.assertRaises(CatalogInternalError):
                    self.catalog.update(
                        self.product["id"],
                        {"title": "Renamed", "images": ["c.jpg"]},
                        user=self.bob,
                    )

        self.assertEqual(self.repository.image_rows(), rows_before)
        self.assertEqual(self.catalog.find_one_plain(self.product["id"]), self.product)


class CatalogRemoveTests(CatalogServiceTestCase):

    def test_remove_by_slug_deletes_product_and_images(self):
        self.catalog.create(product_payload(images=["a.jpg"]), user=self.alice)

        self.catalog.remove("teslo-hoodie")

        self.assertEqual(self.repository.count(), 0)
        self.assertEqual(self.repository.image_rows(), [])

    def test_remove_by_id(self):
        created = self.catalog.create(product_payload(), user=self.alice)

        self.catalog.remove(created["id"])

        with self.assertRaises(ProductNotFoundError):
            self.catalog.find_one(created["id"])

    def test_remove_unknown_is_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            self.catalog.remove("nothing-here")

    def test_delete_all_returns_count(self):
        for n in range(3):
            self.catalog.create(product_payload(f"Product {n}", images=["x.jpg"]), user=self.alice)

        with self.assertLogs("products.services.catalog", level="WARNING"):
            deleted = self.catalog.delete_all()

        self.assertEqual(deleted, 3)
        self.assertEqual(self.catalog.list()["count"], 0)
        self.assertEqual(self.repository.image_rows(), [])
