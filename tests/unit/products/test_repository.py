"""Unit tests for ProductDjangoRepository.

Covers:
- insert: happy path, duplicate SKU, variant payload mismatch.
- exists_by_sku / get_by_id / list.
- delete_by_sku and delete_by_id, including malformed IDs.
- Storage failures wrapped in ProductPersistenceError.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from modules.products.exceptions import ProductPersistenceError
from modules.products.models import Product, ProductType
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


def _book(**overrides) -> Product:
    defaults = {
        "sku": "BK1",
        "name": "X",
        "price": Decimal("9.99"),
        "product_type": ProductType.BOOK,
        "weight": Decimal("1.20"),
    }
    defaults.update(overrides)
    return Product(**defaults)


def _dvd(**overrides) -> Product:
    defaults = {
        "sku": "DVD-1",
        "name": "Disc",
        "price": Decimal("1.00"),
        "product_type": ProductType.DVD,
        "size": Decimal("700"),
    }
    defaults.update(overrides)
    return Product(**defaults)


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)


# ===========================================================================
# insert
# ===========================================================================


class TestInsert:
    def test_persists_product(self, repo):
        product = repo.insert(_book())
        assert product.pk is not None
        stored = Product.objects.get(pk=product.pk)
        assert stored.sku == "BK1"
        assert stored.weight == Decimal("1.20")

    def test_duplicate_sku_raises(self, repo):
        repo.insert(_book())
        with pytest.raises(ProductPersistenceError):
            repo.insert(_book(name="Other"))
        assert Product.objects.count() == 1

    def test_variant_mismatch_raises(self, repo):
        with pytest.raises(ProductPersistenceError):
            repo.insert(_book(size=Decimal("700")))
        assert not Product.objects.exists()

    def test_database_error_is_wrapped(self, repo):
        with patch.object(Product, "save", side_effect=DatabaseError("down")):
            with pytest.raises(ProductPersistenceError) as exc_info:
                repo.insert(_book())
        assert isinstance(exc_info.value.__cause__, DatabaseError)


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_exists_by_sku(self, repo):
        repo.insert(_book())
        assert repo.exists_by_sku("BK1") is True
        assert repo.exists_by_sku("BK2") is False

    def test_get_by_id(self, repo):
        product = repo.insert(_book())
        assert repo.get_by_id(product.pk) == product
        assert repo.get_by_id(str(product.pk)) == product

    @pytest.mark.parametrize("bad_id", ["abc", None, True, 1.5, [1], "-1"])
    def test_get_by_id_malformed(self, repo, bad_id):
        repo.insert(_book())
        assert repo.get_by_id(bad_id) is None

    def test_list_with_filters(self, repo):
        repo.insert(_book())
        repo.insert(_dvd())
        assert [p.sku for p in repo.list()] == ["BK1", "DVD-1"]
        assert [p.sku for p in repo.list({"product_type": "dvd"})] == ["DVD-1"]


# ===========================================================================
# Deletes
# ===========================================================================


class TestDeletes:
    def test_delete_by_sku(self, repo):
        repo.insert(_book())
        assert repo.delete_by_sku("BK1") == 1
        assert not Product.objects.exists()

    def test_delete_by_sku_missing(self, repo):
        assert repo.delete_by_sku("NOPE") == 0

    def test_delete_by_id(self, repo):
        product = repo.insert(_book())
        other = repo.insert(_dvd())
        assert repo.delete_by_id(product.pk) == 1
        assert list(Product.objects.values_list("pk", flat=True)) == [other.pk]

    def test_delete_by_id_accepts_numeric_strings(self, repo):
        product = repo.insert(_book())
        assert repo.delete_by_id(str(product.pk)) == 1

    @pytest.mark.parametrize("bad_id", ["abc", None, False, 2.0, {"id": 1}])
    def test_delete_by_id_malformed(self, repo, bad_id):
        repo.insert(_book())
        assert repo.delete_by_id(bad_id) == 0
        assert Product.objects.count() == 1

    def test_delete_database_error_is_wrapped(self, repo):
        with patch.object(Product.objects, "filter", side_effect=DatabaseError("down")):
            with pytest.raises(ProductPersistenceError):
                repo.delete_by_sku("BK1")
