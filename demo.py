#!/usr/bin/env python
import tempfile
from pathlib import Path

from sdk.cart import CartService, LocalStorage
from sdk.contact import submit_contact
from sdk.shop import ShopClient


def main():
    c = ShopClient()

    # -----------------------------
    # Catalog
    # -----------------------------
    print("Listing products...")
    products = c.list_products()
    print(f"{len(products)} products")

    print("\nCreating a product...")
    widget = c.create_product({"name": "Widget", "price": 9.99, "inventoryStatus": "INSTOCK"})
    print(widget)

    print("\nPatching its price (the id in the body is ignored)...")
    print(c.patch_product(widget["id"], {"price": 12.5, "id": 999999}))

    print("\nFetching it back...")
    print(c.get_product(widget["id"]))

    # -----------------------------
    # Cart (local, in a throwaway storage file)
    # -----------------------------
    storage = LocalStorage(Path(tempfile.mkdtemp()) / "storage.json")
    cart = CartService(storage)
    cart.subscribe(lambda items: print(f"  cart -> {[(i.id, i.quantity) for i in items]}"))

    print("\nFilling the cart...")
    cart.add_to_cart(widget)
    cart.add_to_cart(widget)
    if products:
        cart.add_to_cart(products[0])
    print(f"Items: {cart.get_item_count()}  Total: {cart.get_total():.2f}")

    print("\nDropping the widget to 0 then removing it...")
    cart.update_quantity(widget["id"], 0)
    cart.remove_from_cart(widget["id"])

    # -----------------------------
    # Contact
    # -----------------------------
    print("\nSending the contact form...")
    print(submit_contact({"email": "alice@example.com", "message": "Do you ship abroad?"}))

    # -----------------------------
    # Cleanup
    # -----------------------------
    print("\nDeleting the widget...")
    c.delete_product(widget["id"])
    print(f"{len(c.list_products())} products")


if __name__ == "__main__":
    main()
