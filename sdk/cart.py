# sdk/cart.py
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel

from app.config import settings
from app.database import write_json_atomic
from app.models import CartItem

logger = logging.getLogger(__name__)

CART_KEY = "local_cart"

CartListener = Callable[[List[CartItem]], None]


class LocalStorage:
    """
    Key/value string storage kept in one JSON file on the device, the way a
    browser's localStorage keeps strings per origin.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable local storage %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        write_json_atomic(self.path, data, ensure_ascii=False)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            write_json_atomic(self.path, data, ensure_ascii=False)


class CartService:
    """
    Client-side cart: the current snapshot plus the listeners that get every new
    snapshot. Each mutation persists the whole cart first, then notifies the
    listeners synchronously in the order they subscribed.
    """

    def __init__(self, storage: LocalStorage, key: str = CART_KEY):
        self._storage = storage
        self._key = key
        self._items: List[CartItem] = []
        self._listeners: List[CartListener] = []
        self._load_cart()

    # ---------------------------
    # Snapshot / subscription
    # ---------------------------
    @property
    def items(self) -> List[CartItem]:
        return [item.model_copy() for item in self._items]

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register ``listener``; it is called at once with the current cart."""
        self._listeners.append(listener)
        listener(self.items)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _load_cart(self) -> None:
        raw = self._storage.get_item(self._key)
        if not raw:
            return
        try:
            self._items = [CartItem.model_validate(entry) for entry in json.loads(raw)]
        except (TypeError, ValueError) as e:
            logger.warning("Discarding stored cart under %r: %s", self._key, e)
            self._items = []

    def _save_cart(self, cart: List[CartItem]) -> None:
        self._storage.set_item(self._key, json.dumps([item.model_dump() for item in cart]))
        self._items = cart
        for listener in list(self._listeners):
            listener(self.items)

    # ---------------------------
    # Mutations
    # ---------------------------
    def add_to_cart(self, product: Union[BaseModel, Dict[str, Any]]) -> None:
        data = product.model_dump() if isinstance(product, BaseModel) else dict(product)
        current = self._items
        for i, item in enumerate(current):
            if item.id == data["id"]:
                bumped = item.model_copy(update={"quantity": item.quantity + 1})
                self._save_cart(current[:i] + [bumped] + current[i + 1:])
                return
        self._save_cart(current + [CartItem.model_validate({**data, "quantity": 1})])

    def remove_from_cart(self, product_id: int) -> None:
        self._save_cart([item for item in self._items if item.id != product_id])

    def update_quantity(self, product_id: int, quantity: int) -> None:
        # 0 is stored as-is; callers turn "<= 0" into remove_from_cart
        self._save_cart([
            item.model_copy(update={"quantity": quantity}) if item.id == product_id else item
            for item in self._items
        ])

    def clear_cart(self) -> None:
        self._save_cart([])

    # ---------------------------
    # Derived values
    # ---------------------------
    def get_total(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items)


_CART: Optional[CartService] = None


def get_cart_service() -> CartService:
    """The session-wide cart, loaded from local storage on first use."""
    global _CART
    if _CART is None:
        _CART = CartService(LocalStorage(settings.cart_storage_path))
    return _CART
