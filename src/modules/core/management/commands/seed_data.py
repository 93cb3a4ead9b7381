from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from modules.categories.models import Category
from modules.products.models import Product, Tag, Variant

CATEGORIES = [
    ("Apparel", "Clothing and accessories"),
    ("Footwear", "Shoes, boots and sandals"),
    ("Home", "Furniture and home goods"),
]

# (name, category, base price, discount %, tags, [(size, color, material, sku, price, stock, threshold)])
CATALOG = [
    (
        "Classic T-Shirt",
        "Apparel",
        Decimal("19.90"),
        Decimal("15"),
        ["cotton", "basics"],
        [
            ("S", "White", "Cotton", "TSHIRT-S-WHT", Decimal("19.90"), 40, 10),
            ("M", "White", "Cotton", "TSHIRT-M-WHT", Decimal("19.90"), 4, 10),
            ("L", "Black", "Cotton", "TSHIRT-L-BLK", Decimal("21.90"), 25, 10),
        ],
    ),
    (
        "Denim Jacket",
        "Apparel",
        Decimal("89.00"),
        Decimal("0"),
        ["denim"],
        [
            ("M", "Blue", "Denim", "JACKET-M-BLU", Decimal("89.00"), 12, 5),
            ("L", "Blue", "Denim", "JACKET-L-BLU", Decimal("89.00"), 2, 5),
        ],
    ),
    (
        "Trail Runner",
        "Footwear",
        Decimal("120.00"),
        Decimal("0"),
        ["running", "outdoor"],
        [
            ("42", "Grey", "Mesh", "TRAIL-42-GRY", Decimal("120.00"), 0, 3),
            ("43", "Grey", "Mesh", "TRAIL-43-GRY", Decimal("120.00"), 0, 3),
        ],
    ),
    (
        "Oak Side Table",
        "Home",
        Decimal("149.90"),
        Decimal("0"),
        ["wood"],
        [
            ("", "Natural", "Oak", "TABLE-OAK-NAT", Decimal("149.90"), 30, 5),
        ],
    ),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        categories = self._seed_categories()
        products_created = self._seed_products(categories)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"categories={len(categories)}, "
                f"products_created={products_created}"
            )
        )

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        categories: dict[str, Category] = {}
        for name, description in CATEGORIES:
            category = Category.objects.alive().filter(name=name).first()
            if category is None:
                category = Category.objects.create(name=name, description=description)
            categories[name] = category
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_products(self, categories: dict[str, Category]) -> int:
        self.stdout.write("Creating products...")
        now = timezone.now()
        created = 0
        for name, category, price, discount, tags, variants in CATALOG:
            skus = [row[3] for row in variants]
            if Variant.objects.filter(sku__in=skus).exists():
                continue

            product = Product.objects.create(
                name=name,
                description=f"{name} ({category.lower()})",
                category=categories[category],
                base_price=price,
                discount_percentage=discount,
                discount_start_date=now - timedelta(days=1) if discount else None,
                discount_end_date=now + timedelta(days=30) if discount else None,
            )
            for position, (size, color, material, sku, v_price, stock, threshold) in enumerate(
                variants
            ):
                Variant.objects.create(
                    product=product,
                    position=position,
                    size=size,
                    color=color,
                    material=material,
                    sku=sku,
                    price=v_price,
                    stock=stock,
                    low_stock_threshold=threshold,
                )
            product.tags.set([Tag.objects.get_or_create(name=tag)[0] for tag in tags])
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created
