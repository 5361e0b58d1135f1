"""
Pytest fixtures for catalogshare backend tests.

Every test gets its own app and therefore its own freshly seeded store.
"""

import pytest

from catalogshare import create_app
from catalogshare.extensions import get_storage
from catalogshare.storage import MemStorage

TEST_CONFIG = {
    'TESTING': True,
    'BCRYPT_ROUNDS': 4,
    'PUBLIC_BASE_URL': 'http://shop.test',
}


@pytest.fixture(scope='function')
def app():
    """Create application with a seeded demo store."""
    app = create_app(TEST_CONFIG)
    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def storage(app):
    """The store behind the app under test."""
    return get_storage()


@pytest.fixture(scope='function')
def empty_storage():
    """Unseeded store for core-only tests."""
    return MemStorage(password_rounds=4)


@pytest.fixture(scope='function')
def category(storage):
    """First seeded category (Electronics)."""
    return storage.list_categories(1)[0]


@pytest.fixture(scope='function')
def product(client, category):
    """Create a product through the API."""
    response = client.post('/api/products', json={
        'name': 'Wireless Earbuds',
        'sku': 'EAR-001',
        'price': 49.99,
        'stock': 25,
        'category_id': category.id,
    })
    assert response.status_code == 201
    return response.json


@pytest.fixture(scope='function')
def make_order_payload():
    """Builder for storefront order payloads."""
    def _make(total=100.0, **overrides) -> dict:
        payload = {
            'customer_name': 'Asha Rao',
            'customer_email': 'asha@example.com',
            'customer_phone': '9000000001',
            'total_amount': total,
            'items': [{'product_id': 1, 'quantity': 2, 'price': total / 2}],
        }
        payload.update(overrides)
        return payload

    return _make
