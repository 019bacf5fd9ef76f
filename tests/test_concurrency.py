# tests/test_concurrency.py
import asyncio
import time

import httpx

from app.database import CatalogStore
from app.main import app
from app.sdk import patch_product_logic


async def _send(method, url, **kwargs):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.request(method, url, **kwargs)


def test_concurrent_patches_keep_both_changes(client):
    # two writers on the same product, each touching a different field
    async def run():
        return await asyncio.gather(
            _send("PATCH", "/api/products/1", json={"price": 10}),
            _send("PATCH", "/api/products/1", json={"rating": 1}),
        )

    results = asyncio.run(run())
    assert [r.status_code for r in results] == [200, 200]

    product = client.get("/api/products/1").json()
    assert product["price"] == 10
    assert product["rating"] == 1


def test_concurrent_creates_get_distinct_ids(client):
    async def run():
        return await asyncio.gather(*[
            _send("POST", "/api/products", json={"name": f"item-{i}"}) for i in range(10)
        ])

    results = asyncio.run(run())
    assert all(r.status_code == 201 for r in results)
    new_ids = sorted(r.json()["id"] for r in results)
    assert new_ids == list(range(4, 14))
    assert len(client.get("/api/products").json()) == 13


class SlowCatalogStore(CatalogStore):
    """Reads take long enough that a second writer always starts mid-cycle."""

    def load(self):
        data = super().load()
        time.sleep(0.05)
        return data


class _NoLock:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


def _patch_twice(store):
    async def run():
        await asyncio.gather(
            patch_product_logic(store, 1, {"price": 10}),
            patch_product_logic(store, 1, {"rating": 1}),
        )
    asyncio.run(run())
    return store.load()["products"][0]


def test_catalog_lock_prevents_lost_update(catalog_path):
    product = _patch_twice(SlowCatalogStore(catalog_path))
    assert product["price"] == 10
    assert product["rating"] == 1


def test_writers_overlap_without_the_lock(catalog_path, monkeypatch):
    # same scenario with the lock disabled: whichever save lands last wins
    monkeypatch.setattr(SlowCatalogStore, "lock", property(lambda self: _NoLock()))
    product = _patch_twice(SlowCatalogStore(catalog_path))
    changed = (product["price"] == 10, product["rating"] == 1)
    assert changed in [(True, False), (False, True)]
