import pytest

from basket_api import create_app
from basket_api.services import BasketService, BasketStore, DiscountCodeRegistry


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'LOG_LEVEL': 'WARNING',
        'INACTIVE_DISCOUNT_CODES': [],
    })
    return app


@pytest.fixture
def store():
    return BasketStore()


@pytest.fixture
def service(store):
    return BasketService(store, DiscountCodeRegistry.from_seed())
