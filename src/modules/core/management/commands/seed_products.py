from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.dtos import BookSubmission, DvdSubmission, FurnitureSubmission
from modules.products.factory import ProductFactory
from modules.products.repositories.django_repository import ProductDjangoRepository

SEED_PRODUCTS = [
    DvdSubmission(
        sku="JVC200123", name="Acme DISC", price=Decimal("1.00"), size=Decimal("700")
    ),
    DvdSubmission(
        sku="JVC200124", name="Acme DISC", price=Decimal("1.00"), size=Decimal("700")
    ),
    BookSubmission(
        sku="GGWP0007", name="War and Peace", price=Decimal("20.00"), weight=Decimal("2")
    ),
    BookSubmission(
        sku="GGWP0008", name="Anna Karenina", price=Decimal("18.50"), weight=Decimal("1.5")
    ),
    FurnitureSubmission(
        sku="TR120555",
        name="Chair",
        price=Decimal("40.00"),
        height=Decimal("24"),
        width=Decimal("45"),
        length=Decimal("15"),
    ),
    FurnitureSubmission(
        sku="TR120556",
        name="Table",
        price=Decimal("120.00"),
        height=Decimal("75"),
        width=Decimal("120"),
        length=Decimal("80"),
    ),
]


class Command(BaseCommand):
    help = "Seed database with demo books, DVDs and furniture."

    def handle(self, *args, **options):
        repo = ProductDjangoRepository()
        factory = ProductFactory()
        created = 0

        self.stdout.write("Seeding products...")
        for submission in SEED_PRODUCTS:
            if repo.exists_by_sku(submission.sku):
                continue
            repo.insert(factory.create(submission.product_type, submission))
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={created}, skipped={len(SEED_PRODUCTS) - created}"
            )
        )
