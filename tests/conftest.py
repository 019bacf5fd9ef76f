# tests/conftest.py
import json

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.database import CatalogStore
from app.main import app, get_store

SEED = [
    {"id": 1, "code": "f230fh0g3", "name": "Bamboo Watch", "description": "Product Description",
     "price": 65, "quantity": 24, "inventoryStatus": "INSTOCK", "category": "Accessories",
     "image": "bamboo-watch.jpg", "rating": 5},
    {"id": 2, "code": "nvklal433", "name": "Black Watch", "description": "Product Description",
     "price": 72, "quantity": 61, "inventoryStatus": "INSTOCK", "category": "Accessories",
     "image": "black-watch.jpg", "rating": 4},
    {"id": 3, "code": "zz21cz3c1", "name": "Blue Band", "description": "Product Description",
     "price": 79, "quantity": 2, "inventoryStatus": "LOWSTOCK", "category": "Fitness",
     "image": "blue-band.jpg", "rating": 3},
]


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"products": SEED}, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def store(catalog_path):
    return CatalogStore(catalog_path)


def _client_for(catalog_path, **overrides):
    cfg = Settings(data_path=catalog_path, **overrides)
    app.dependency_overrides[get_settings] = lambda: cfg
    app.dependency_overrides[get_store] = lambda: CatalogStore(catalog_path)
    return TestClient(app)


@pytest.fixture
def client(catalog_path):
    yield _client_for(catalog_path)
    app.dependency_overrides.clear()


@pytest.fixture
def max_id_client(catalog_path):
    yield _client_for(catalog_path, id_strategy="max")
    app.dependency_overrides.clear()


def read_catalog(path):
    return json.loads(path.read_text(encoding="utf-8"))
