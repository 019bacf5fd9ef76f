import logging
from typing import Dict, Any, List

from starlette.concurrency import run_in_threadpool

from .core import NotFound, find_index, next_product_id, overlay
from .database import CatalogStore

# This file contains the product resource logic behind the API endpoints.
# Disk access runs in the threadpool; mutations hold the catalog lock for the
# whole load/modify/save cycle since the loop can switch tasks between steps.

logger = logging.getLogger(__name__)


async def list_products_logic(store: CatalogStore) -> List[Dict[str, Any]]:
    data = await run_in_threadpool(store.load)
    return data["products"]


async def get_product_logic(store: CatalogStore, product_id: int) -> Dict[str, Any]:
    data = await run_in_threadpool(store.load)
    products = data["products"]
    idx = find_index(products, product_id)
    if idx is None:
        logger.info("Product %s not found", product_id)
        raise NotFound(product_id)
    return products[idx]


async def create_product_logic(store: CatalogStore, payload: Dict[str, Any],
                               id_strategy: str = "length") -> Dict[str, Any]:
    async with store.lock:
        data = await run_in_threadpool(store.load)
        fields = {k: v for k, v in payload.items() if k != "id"}
        product = {"id": next_product_id(data["products"], id_strategy), **fields}
        data["products"].append(product)
        await run_in_threadpool(store.save, data)
    logger.info("Created product %s", product["id"])
    return product


async def update_product_logic(store: CatalogStore, product_id: int,
                               payload: Dict[str, Any]) -> Dict[str, Any]:
    async with store.lock:
        data = await run_in_threadpool(store.load)
        idx = find_index(data["products"], product_id)
        if idx is None:
            logger.info("Update of missing product %s", product_id)
            raise NotFound(product_id)
        # ids are immutable, a replacement body cannot carry a new one
        changes = {k: v for k, v in payload.items() if k != "id"}
        data["products"][idx] = overlay(data["products"][idx], changes)
        await run_in_threadpool(store.save, data)
    logger.info("Updated product %s", product_id)
    return data["products"][idx]


async def patch_product_logic(store: CatalogStore, product_id: int,
                              payload: Dict[str, Any]) -> Dict[str, Any]:
    async with store.lock:
        data = await run_in_threadpool(store.load)
        idx = find_index(data["products"], product_id)
        if idx is None:
            logger.info("Patch of missing product %s", product_id)
            raise NotFound(product_id)
        current = data["products"][idx]
        updated = overlay(current, payload)
        # Ensure the ID is not changed
        updated["id"] = current["id"]
        data["products"][idx] = updated
        await run_in_threadpool(store.save, data)
    logger.info("Patched product %s fields=%s", product_id, sorted(payload))
    return updated


async def delete_product_logic(store: CatalogStore, product_id: int) -> None:
    async with store.lock:
        data = await run_in_threadpool(store.load)
        idx = find_index(data["products"], product_id)
        if idx is None:
            logger.info("Delete of missing product %s", product_id)
            raise NotFound(product_id)
        del data["products"][idx]
        await run_in_threadpool(store.save, data)
    logger.info("Deleted product %s", product_id)
