"""Product model: one table, three variants.

A product is a book, a DVD or a piece of furniture.  The variant is
recorded in ``product_type`` and only the matching attribute columns
are populated:

- book: ``weight`` (Kg)
- dvd: ``size`` (MB)
- furniture: ``height``, ``width``, ``length`` (cm)

The "exactly one variant payload" rule is checked in ``clean()`` and
backed by a database CHECK constraint.
"""

from __future__ import annotations

from typing import Dict, Tuple

from django.core.exceptions import ValidationError
from django.db import models

from modules.core.models import BaseModel


class ProductType(models.TextChoices):
    BOOK = "book", "Book"
    DVD = "dvd", "DVD"
    FURNITURE = "furniture", "Furniture"


VARIANT_FIELDS: Dict[str, Tuple[str, ...]] = {
    ProductType.BOOK.value: ("weight",),
    ProductType.DVD.value: ("size",),
    ProductType.FURNITURE.value: ("height", "width", "length"),
}

ATTRIBUTE_FIELDS: Tuple[str, ...] = ("weight", "size", "height", "width", "length")


def _variant_condition(product_type: str) -> models.Q:
    populated = VARIANT_FIELDS[product_type]
    lookups = {"product_type": product_type}
    for field in ATTRIBUTE_FIELDS:
        lookups[f"{field}__isnull"] = field not in populated
    return models.Q(**lookups)


def _decimal_attribute(**kwargs) -> models.DecimalField:
    return models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, default=None, **kwargs
    )


class Product(BaseModel):
    """Catalog product.

    ``sku`` is the business key; ``unique=True`` creates the unique index
    that also catches a duplicate slipping past the service-level check.
    """

    sku = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    product_type = models.CharField(max_length=20, choices=ProductType.choices)

    weight = _decimal_attribute()
    size = _decimal_attribute()
    height = _decimal_attribute()
    width = _decimal_attribute()
    length = _decimal_attribute()

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["product_type"], name="products_type_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    _variant_condition(ProductType.BOOK.value)
                    | _variant_condition(ProductType.DVD.value)
                    | _variant_condition(ProductType.FURNITURE.value)
                ),
                name="products_single_variant_payload",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        expected = VARIANT_FIELDS.get(self.product_type)
        if expected is None:
            raise ValidationError({"product_type": "Unknown product type."})
        errors = {}
        for field in ATTRIBUTE_FIELDS:
            value = getattr(self, field)
            if field in expected and value is None:
                errors[field] = f"{field.capitalize()} is required for {self.product_type}."
            elif field not in expected and value is not None:
                errors[field] = f"{field.capitalize()} does not apply to {self.product_type}."
        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def attribute(self) -> str:
        """Human-readable variant attribute, as shown in the product list."""
        if self.product_type == ProductType.BOOK:
            return f"Weight: {self.weight.normalize():f}KG"
        if self.product_type == ProductType.DVD:
            return f"Size: {self.size.normalize():f} MB"
        if self.product_type == ProductType.FURNITURE:
            dims = (self.height, self.width, self.length)
            return "Dimension: " + "x".join(f"{d.normalize():f}" for d in dims)
        return ""

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
