import pytest

from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient; keeps the session cookie between requests."""
    return APIClient()


@pytest.fixture()
def book_payload():
    return {
        "sku": "BK1",
        "name": "X",
        "price": "9.99",
        "productType": "book",
        "weight": "1.2",
    }


@pytest.fixture()
def dvd_payload():
    return {
        "sku": "DVD-001",
        "name": "Acme DISC",
        "price": "1.00",
        "productType": "dvd",
        "size": "700",
    }


@pytest.fixture()
def furniture_payload():
    return {
        "sku": "FRN-001",
        "name": "Chair",
        "price": "40",
        "productType": "furniture",
        "height": "24",
        "width": "45",
        "length": "15",
    }
