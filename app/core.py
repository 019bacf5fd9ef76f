from typing import Optional, Dict, Any, List

Catalog = Dict[str, List[Dict[str, Any]]]


class NotFound(Exception):
    """No product with the requested id exists."""

    def __init__(self, product_id: int):
        super().__init__(f"product {product_id} not found")
        self.product_id = product_id


class StorageFailure(Exception):
    """The catalog file could not be read, parsed or written."""


def empty_catalog() -> Catalog:
    return {"products": []}


def overlay(existing: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Field-by-field shallow merge: keys present in ``changes`` win, the rest of
    ``existing`` is kept. Neither argument is modified.
    """
    merged = dict(existing)
    for key, value in changes.items():
        merged[key] = value
    return merged


def next_product_id(products: List[Dict[str, Any]], strategy: str = "length") -> int:
    # "length" hands out len + 1, which collides with a surviving id once
    # anything but the last product has been deleted
    if strategy == "max":
        return max((p.get("id", 0) for p in products), default=0) + 1
    return len(products) + 1


def find_index(products: List[Dict[str, Any]], product_id: int) -> Optional[int]:
    for i, p in enumerate(products):
        if p.get("id") == product_id:
            return i
    return None
