# app/models.py
from enum import Enum
from pydantic import BaseModel, ConfigDict


class InventoryStatus(str, Enum):
    INSTOCK = "INSTOCK"
    LOWSTOCK = "LOWSTOCK"
    OUTOFSTOCK = "OUTOFSTOCK"


class Product(BaseModel):
    # catalog records may carry extra keys, they are kept as-is
    model_config = ConfigDict(extra="allow", use_enum_values=True, validate_default=True)

    id: int
    code: str = ""
    name: str = ""
    description: str = ""
    price: float = 0
    quantity: int = 0
    inventoryStatus: InventoryStatus = InventoryStatus.INSTOCK
    category: str = ""
    image: str = ""
    rating: float = 0


class CartItem(Product):
    quantity: int = 1
