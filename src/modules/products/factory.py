"""Product factory: validated submission -> concrete ``Product`` record.

The factory trusts the DTO it receives (validation already ran) and
only checks that the requested type tag exists and agrees with the
DTO's own tag.
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple, Type

from modules.products.dtos import (
    BookSubmission,
    DvdSubmission,
    FurnitureSubmission,
    ProductSubmission,
    ProductSubmissionBase,
)
from modules.products.exceptions import InvalidProductData, InvalidProductType
from modules.products.models import Product, ProductType


def _build_book(submission: BookSubmission) -> Product:
    return Product(
        sku=submission.sku,
        name=submission.name,
        price=submission.price,
        product_type=ProductType.BOOK,
        weight=submission.weight,
    )


def _build_dvd(submission: DvdSubmission) -> Product:
    return Product(
        sku=submission.sku,
        name=submission.name,
        price=submission.price,
        product_type=ProductType.DVD,
        size=submission.size,
    )


def _build_furniture(submission: FurnitureSubmission) -> Product:
    return Product(
        sku=submission.sku,
        name=submission.name,
        price=submission.price,
        product_type=ProductType.FURNITURE,
        height=submission.height,
        width=submission.width,
        length=submission.length,
    )


class ProductFactory:
    """Maps a product type tag to the builder for that variant."""

    _builders: Dict[str, Tuple[Type[ProductSubmissionBase], Callable[..., Product]]] = {
        ProductType.BOOK.value: (BookSubmission, _build_book),
        ProductType.DVD.value: (DvdSubmission, _build_dvd),
        ProductType.FURNITURE.value: (FurnitureSubmission, _build_furniture),
    }

    def create(self, product_type: str, submission: ProductSubmission) -> Product:
        """Build an unsaved ``Product`` for ``submission``.

        Raises:
            InvalidProductType: if ``product_type`` names no known variant.
            InvalidProductData: if ``submission`` is not a DTO of that variant.
        """
        try:
            dto_class, build = self._builders[product_type]
        except (KeyError, TypeError):
            raise InvalidProductType(f"Unknown product type {product_type!r}.") from None

        if not isinstance(submission, dto_class):
            raise InvalidProductData(
                f"Expected {dto_class.__name__} for {product_type!r}, "
                f"got {type(submission).__name__}."
            )
        return build(submission)
