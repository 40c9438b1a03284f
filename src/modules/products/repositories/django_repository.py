"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern (``None`` / ``0`` for
missing rows); storage failures are wrapped in
``ProductPersistenceError`` so the Service Layer never sees Django
exceptions.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from modules.products.exceptions import ProductPersistenceError
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: Any) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        pk = _coerce_id(id)
        if pk is None:
            return None
        return Product.objects.filter(id=pk).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"product_type": "dvd"}
            {"name__icontains": "chair"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def exists_by_sku(self, sku: str) -> bool:
        return Product.objects.filter(sku=sku).exists()

    def insert(self, entity: Product) -> Product:
        """Validate and store a new product in its own transaction."""
        try:
            entity.full_clean()
            with transaction.atomic():
                entity.save(force_insert=True)
        except (ValidationError, DatabaseError) as exc:
            raise ProductPersistenceError(f"Could not insert product {entity.sku!r}.") from exc
        logger.info(
            "product.saved",
            product_id=entity.id,
            sku=entity.sku,
            product_type=entity.product_type,
        )
        return entity

    def delete_by_sku(self, sku: str) -> int:
        try:
            deleted, _ = Product.objects.filter(sku=sku).delete()
        except DatabaseError as exc:
            raise ProductPersistenceError(f"Could not delete product {sku!r}.") from exc
        logger.info("product.deleted", sku=sku, deleted=deleted)
        return deleted

    def delete_by_id(self, id: Any) -> int:
        """Delete one product by primary key.

        Malformed IDs match no row and return ``0``.
        """
        pk = _coerce_id(id)
        if pk is None:
            return 0
        try:
            deleted, _ = Product.objects.filter(id=pk).delete()
        except DatabaseError as exc:
            raise ProductPersistenceError(f"Could not delete product {id!r}.") from exc
        logger.info("product.deleted", product_id=id, deleted=deleted)
        return deleted


def _coerce_id(value: Any) -> Optional[int]:
    """Integer primary key from a JSON id (``7`` or ``"7"``), else ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
