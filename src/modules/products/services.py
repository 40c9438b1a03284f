"""Product service layer (Use Cases).

Orchestrates the three catalog actions, delegating persistence to the
injected ``IProductRepository`` and the "last added SKU" bookkeeping to
the injected ``SessionStore``.

- create: validate -> build -> insert -> remember SKU in the session.
- cancel: delete the product whose SKU the session remembers, if any.
- bulk delete: one delete per identifier, stopping at the first failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping, Optional

import structlog

from modules.products.exceptions import ProductPersistenceError, ProductValidationError
from modules.products.factory import ProductFactory
from modules.products.sessions import LAST_ADDED_SKU
from modules.products.validators import ProductSubmissionValidator

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository
    from modules.products.sessions import SessionStore

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` and a ``SessionStore`` via
    constructor injection (DIP).  The session is only needed by the
    create and cancel commands.
    """

    def __init__(
        self,
        repository: IProductRepository,
        session: Optional[SessionStore] = None,
        validator: Optional[ProductSubmissionValidator] = None,
        factory: Optional[ProductFactory] = None,
    ) -> None:
        self._repo = repository
        self._session = session
        self._validator = validator or ProductSubmissionValidator(repository)
        self._factory = factory or ProductFactory()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, data: Mapping[str, Any]) -> Product:
        """Validate ``data``, store the product and remember its SKU.

        Raises:
            ProductValidationError: field errors, nothing was stored.
            InvalidProductType / InvalidProductData: no product could be built.
            ProductPersistenceError: the insert failed.
        """
        log = logger.bind(sku=data.get("sku"), product_type=data.get("productType"))

        try:
            submission = self._validator.validate(data)
        except ProductValidationError as exc:
            log.info("product.validation_failed", fields=sorted(exc.errors))
            raise

        product = self._factory.create(submission.product_type, submission)
        product = self._repo.insert(product)
        self._session.set(LAST_ADDED_SKU, product.sku)
        log.info("product.created", product_id=product.id)
        return product

    def cancel_last_product(self) -> Optional[str]:
        """Delete the most recently created product of this session.

        Returns the SKU that was targeted, or ``None`` when the session
        has no record of a created product (a no-op).
        """
        sku = self._session.get(LAST_ADDED_SKU)
        if not sku:
            logger.info("product.cancel_noop")
            return None
        deleted = self._repo.delete_by_sku(sku)
        logger.info("product.cancelled", sku=sku, deleted=deleted)
        return sku

    def delete_products(self, ids: Iterable[Any]) -> int:
        """Delete each product in ``ids``; return how many rows went away.

        Each deletion stands alone.  The first failure aborts the loop,
        deletions already done are kept.
        """
        ids = list(ids)
        deleted = 0
        for processed, product_id in enumerate(ids):
            try:
                deleted += self._repo.delete_by_id(product_id)
            except ProductPersistenceError:
                logger.error(
                    "products.bulk_delete_aborted",
                    failed_id=product_id,
                    processed=processed,
                    requested=len(ids),
                    exc_info=True,
                )
                raise
        logger.info("products.bulk_deleted", requested=len(ids), deleted=deleted)
        return deleted

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> Iterable[Product]:
        """Return products ordered by id, optionally filtered."""
        return self._repo.list(filters)
