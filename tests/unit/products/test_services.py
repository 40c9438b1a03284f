"""Unit tests for ProductService.

Covers:
- create_product: happy path, validation failures, duplicate SKU,
  persistence failure, session bookkeeping.
- cancel_last_product: with and without a remembered SKU.
- delete_products: one delete per id, fail-fast on persistence errors.
- list_products: delegation to repository.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock, call

import pytest

from modules.products.exceptions import (
    InvalidProductType,
    ProductPersistenceError,
    ProductValidationError,
)
from modules.products.models import ProductType
from modules.products.services import ProductService
from modules.products.sessions import LAST_ADDED_SKU

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class FakeSession:
    """In-memory ``SessionStore``."""

    def __init__(self, **values) -> None:
        self.values = dict(values)

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value) -> None:
        self.values[key] = value


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.exists_by_sku.return_value = False
    repo.insert.side_effect = lambda p: p
    repo.delete_by_id.return_value = 1
    repo.delete_by_sku.return_value = 1
    return repo


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def service(mock_repo, session):
    return ProductService(repository=mock_repo, session=session)


# ===========================================================================
# create_product
# ===========================================================================


class TestCreateProduct:
    def test_valid_book(self, service, mock_repo, session, book_payload):
        product = service.create_product(book_payload)

        assert product.sku == "BK1"
        assert product.product_type == ProductType.BOOK
        assert product.weight == Decimal("1.2")
        mock_repo.insert.assert_called_once_with(product)
        assert session.values[LAST_ADDED_SKU] == "BK1"

    def test_each_create_overwrites_last_sku(self, service, session, book_payload, dvd_payload):
        service.create_product(book_payload)
        service.create_product(dvd_payload)
        assert session.values[LAST_ADDED_SKU] == "DVD-001"

    def test_missing_fields(self, service, mock_repo, session):
        with pytest.raises(ProductValidationError) as exc_info:
            service.create_product({"sku": "BK1", "productType": "book", "weight": "1"})

        assert exc_info.value.errors == {
            "name": "Name field is required.",
            "price": "Price field is required.",
        }
        mock_repo.insert.assert_not_called()
        assert LAST_ADDED_SKU not in session.values

    def test_duplicate_sku(self, service, mock_repo, session, book_payload):
        mock_repo.exists_by_sku.return_value = True

        with pytest.raises(ProductValidationError) as exc_info:
            service.create_product(book_payload)

        assert exc_info.value.errors == {"sku": "This SKU has already been used"}
        mock_repo.insert.assert_not_called()

    def test_persistence_failure_leaves_session_untouched(
        self, service, mock_repo, session, book_payload
    ):
        session.values[LAST_ADDED_SKU] = "OLD-1"
        mock_repo.insert.side_effect = ProductPersistenceError("boom")

        with pytest.raises(ProductPersistenceError):
            service.create_product(book_payload)

        assert session.values[LAST_ADDED_SKU] == "OLD-1"

    def test_unknown_type_is_not_stored(self, service, mock_repo, session, book_payload):
        with pytest.raises(InvalidProductType):
            service.create_product({**book_payload, "productType": "vinyl"})

        mock_repo.insert.assert_not_called()
        assert LAST_ADDED_SKU not in session.values

    def test_factory_failure_propagates(self, mock_repo, session, book_payload):
        factory = MagicMock()
        factory.create.side_effect = InvalidProductType("nope")
        service = ProductService(repository=mock_repo, session=session, factory=factory)

        with pytest.raises(InvalidProductType):
            service.create_product(book_payload)

        mock_repo.insert.assert_not_called()


# ===========================================================================
# cancel_last_product
# ===========================================================================


class TestCancelLastProduct:
    def test_deletes_remembered_sku(self, service, mock_repo, session):
        session.values[LAST_ADDED_SKU] = "BK1"

        assert service.cancel_last_product() == "BK1"
        mock_repo.delete_by_sku.assert_called_once_with("BK1")

    def test_sku_is_kept_after_cancel(self, service, session):
        session.values[LAST_ADDED_SKU] = "BK1"
        service.cancel_last_product()
        assert session.values[LAST_ADDED_SKU] == "BK1"

    def test_no_remembered_sku_is_a_noop(self, service, mock_repo):
        assert service.cancel_last_product() is None
        mock_repo.delete_by_sku.assert_not_called()

    def test_delete_failure_propagates(self, service, mock_repo, session):
        session.values[LAST_ADDED_SKU] = "BK1"
        mock_repo.delete_by_sku.side_effect = ProductPersistenceError("boom")

        with pytest.raises(ProductPersistenceError):
            service.cancel_last_product()


# ===========================================================================
# delete_products
# ===========================================================================


class TestDeleteProducts:
    def test_one_delete_per_id(self, service, mock_repo):
        deleted = service.delete_products([1, 2, 3])

        assert mock_repo.delete_by_id.call_args_list == [call(1), call(2), call(3)]
        assert deleted == 3

    def test_counts_only_matched_rows(self, service, mock_repo):
        mock_repo.delete_by_id.side_effect = [1, 0, 1]
        assert service.delete_products([1, 99, 3]) == 2

    def test_empty_list(self, service, mock_repo):
        assert service.delete_products([]) == 0
        mock_repo.delete_by_id.assert_not_called()

    def test_stops_at_first_failure(self, service, mock_repo):
        mock_repo.delete_by_id.side_effect = [1, ProductPersistenceError("boom"), 1]

        with pytest.raises(ProductPersistenceError):
            service.delete_products([1, 2, 3])

        assert mock_repo.delete_by_id.call_args_list == [call(1), call(2)]


# ===========================================================================
# list_products
# ===========================================================================


class TestListProducts:
    def test_delegates_to_repository(self, mock_repo):
        mock_repo.list.return_value = ["a", "b"]
        service = ProductService(repository=mock_repo)

        assert service.list_products({"product_type": "dvd"}) == ["a", "b"]
        mock_repo.list.assert_called_once_with({"product_type": "dvd"})
