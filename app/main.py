# app/main.py
import logging
from typing import Dict, Any

from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings, settings
from .core import NotFound, StorageFailure
from .database import CatalogStore
from .sdk import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, patch_product_logic, delete_product_logic,
)

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="shop-api (JSON file catalog)",
    docs_url="/api/api-docs",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Dependencies
# ---------------------------
def get_store(cfg: Settings = Depends(get_settings)) -> CatalogStore:
    return CatalogStore(cfg.data_path)

# ---------------------------
# Error mapping
# ---------------------------
_STORAGE_ERRORS = {
    "GET": "Error reading data",
    "PATCH": "Error updating data",
}

@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"error": "Product not found"})

@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    message = _STORAGE_ERRORS.get(request.method, "Error writing data")
    return JSONResponse(status_code=500, content={"error": message})

# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products", tags=["Products"])

@router.get("")
async def list_products(store: CatalogStore = Depends(get_store)):
    """Returns the list of all products."""
    return await list_products_logic(store)

@router.get("/{product_id}")
async def get_product(product_id: int, store: CatalogStore = Depends(get_store)):
    """Get a product by id."""
    return await get_product_logic(store, product_id)

@router.post("", status_code=201)
async def create_product(payload: Dict[str, Any] = Body(...),
                         store: CatalogStore = Depends(get_store),
                         cfg: Settings = Depends(get_settings)):
    """Create a new product; the id is assigned by the server."""
    return await create_product_logic(store, payload, cfg.id_strategy)

@router.put("/{product_id}")
async def update_product(product_id: int, payload: Dict[str, Any] = Body(...),
                         store: CatalogStore = Depends(get_store)):
    """Update a product by id."""
    return await update_product_logic(store, product_id, payload)

@router.patch("/{product_id}")
async def patch_product(product_id: int, payload: Dict[str, Any] = Body(...),
                        store: CatalogStore = Depends(get_store)):
    """Update part of a product. The id can never be changed."""
    return await patch_product_logic(store, product_id, payload)

@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: int, store: CatalogStore = Depends(get_store)):
    """Remove the product by id."""
    await delete_product_logic(store, product_id)
    return Response(status_code=204)

app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
