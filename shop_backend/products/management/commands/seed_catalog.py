from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from products.services import get_catalog_service
from users.models import Role

User = get_user_model()

SEED_ADMIN_EMAIL = "admin@shop.local"
SEED_ADMIN_PASSWORD = "Seed-Admin-2024!"

SEED_PRODUCTS = [
    {
        "title": "Men's Chill Crew Neck Sweatshirt",
        "description": "Warm crew neck sweatshirt in a heavyweight cotton blend.",
        "price": "75.00",
        "stock": 7,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "gender": "men",
        "tags": ["sweatshirt"],
        "images": [
            "https://cdn.shop.local/1740176-00-A_0_2000.jpg",
            "https://cdn.shop.local/1740176-00-A_1.jpg",
        ],
    },
    {
        "title": "Men's Quilted Shirt Jacket",
        "description": "Relaxed fit quilted jacket with a water-repellent finish.",
        "price": "200.00",
        "stock": 5,
        "sizes": ["XS", "S", "M", "XL", "XXL"],
        "gender": "men",
        "tags": ["jacket"],
        "images": [
            "https://cdn.shop.local/1740507-00-A_0_2000.jpg",
            "https://cdn.shop.local/1740507-00-A_1.jpg",
        ],
    },
    {
        "title": "Women's Cropped Puffer Hoodie",
        "description": "Cropped puffer with an oversized hood.",
        "price": "130.00",
        "stock": 10,
        "sizes": ["XS", "S", "M"],
        "gender": "women",
        "tags": ["hoodie"],
        "images": [
            "https://cdn.shop.local/1740535-00-A_0_2000.jpg",
        ],
    },
    {
        "title": "Kids Checkered Tee",
        "description": "Soft cotton tee with an all-over check print.",
        "price": "25.00",
        "stock": 12,
        "sizes": ["XS", "S", "M"],
        "gender": "kid",
        "tags": ["shirt"],
        "images": [
            "https://cdn.shop.local/8529312-00-A_0_2000.jpg",
        ],
    },
    {
        "title": "Unisex Logo Beanie",
        "price": "35.00",
        "stock": 20,
        "sizes": ["M"],
        "gender": "unisex",
        "tags": ["hats", "beanie"],
        "images": [],
    },
]


class Command(BaseCommand):
    help = "Wipe the catalog and seed products owned by a seed admin user"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush-only",
            action="store_true",
            help="Delete every product (and image) without seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        catalog = get_catalog_service()

        deleted = catalog.delete_all()
        self.stdout.write(self.style.WARNING(f"Deleted {deleted} products."))

        if options["flush_only"]:
            return

        # -------------------------------
        # SEED ADMIN
        # -------------------------------
        admin = User.objects.filter(email=SEED_ADMIN_EMAIL).first()
        if admin is None:
            admin = User.objects.create_user(
                email=SEED_ADMIN_EMAIL,
                password=SEED_ADMIN_PASSWORD,
                full_name="Seed Admin",
                role=Role.ADMIN,
            )
            self.stdout.write(f"Created seed admin {SEED_ADMIN_EMAIL}.")

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        for payload in SEED_PRODUCTS:
            catalog.create(payload, user=admin)

        self.stdout.write(
            self.style.SUCCESS(f"Seeded {len(SEED_PRODUCTS)} products.")
        )
