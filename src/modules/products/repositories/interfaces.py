"""Product repository interface.

Extends ``IRepository[Product]`` with the SKU look-ups the catalog
actions need: the uniqueness check on create and the delete-by-SKU
behind "cancel last product".
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    ``insert`` and the ``delete_*`` methods raise
    ``ProductPersistenceError`` when the storage layer fails.
    """

    @abstractmethod
    def exists_by_sku(self, sku: str) -> bool:
        """Whether a product with this SKU is already stored."""

    @abstractmethod
    def delete_by_sku(self, sku: str) -> int:
        """Remove the product with this SKU, returning the number of rows removed."""
