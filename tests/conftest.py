# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.database import store
from app.main import app


@pytest.fixture(autouse=True)
def reset_store():
    store.reset()
    yield
    store.reset()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": settings.API_KEY}


@pytest.fixture
def new_product():
    return {
        "name": "Desk Lamp",
        "description": "LED lamp with dimmer",
        "price": 35.5,
        "category": "home",
        "inStock": True,
    }
