import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from models.cart import CartStore
from models.product import ProductStore


@pytest.fixture
def test_settings(tmp_path):
    return Settings(DATA_DIR=str(tmp_path / "data"))


@pytest.fixture
def product_store(tmp_path):
    return ProductStore(tmp_path / "products.json")


@pytest.fixture
def cart_store(tmp_path):
    return CartStore(tmp_path / "carts.json")


@pytest.fixture
def client(test_settings):
    # Entering the client runs the lifespan, which builds the stores
    with TestClient(create_app(test_settings)) as c:
        yield c
