# sdk/shop.py
import requests
from typing import Any, Dict, List, Optional

from app.config import settings


class ShopClient:
    def __init__(self, base_url: str = settings.api_base_url, timeout: int = 10,
                 session: Optional[Any] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, product_id: Optional[int] = None) -> str:
        url = f"{self.base_url}/api/products"
        return url if product_id is None else f"{url}/{product_id}"

    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(self._url(), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: int) -> Dict[str, Any]:
        r = self.session.get(self._url(product_id), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        r = self.session.post(self._url(), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        r = self.session.put(self._url(product_id), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def patch_product(self, product_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        r = self.session.patch(self._url(product_id), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int) -> None:
        r = self.session.delete(self._url(product_id), timeout=self.timeout)
        r.raise_for_status()


def _parse_fields(pairs: List[str]) -> Dict[str, Any]:
    """Turn ``key=value`` arguments into a payload; numbers are converted."""
    fields: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"expected key=value, got {pair!r}")
        for cast in (int, float):
            try:
                fields[key] = cast(value)
                break
            except ValueError:
                continue
        else:
            fields[key] = value
    return fields


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Shop catalog CLI")
    parser.add_argument("--base-url", default=settings.api_base_url)
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("product_id", type=int)

    cp = subparsers.add_parser("create-product", help="Create a product from key=value fields")
    cp.add_argument("fields", nargs="+", help="e.g. name=Widget price=9.99")

    up = subparsers.add_parser("update-product", help="Replace fields of a product")
    up.add_argument("product_id", type=int)
    up.add_argument("fields", nargs="+")

    pp = subparsers.add_parser("patch-product", help="Change some fields of a product")
    pp.add_argument("product_id", type=int)
    pp.add_argument("fields", nargs="+")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("product_id", type=int)

    args = parser.parse_args()
    c = ShopClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(_parse_fields(args.fields)))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, _parse_fields(args.fields)))
    elif args.command == "patch-product":
        print(c.patch_product(args.product_id, _parse_fields(args.fields)))
    elif args.command == "delete-product":
        c.delete_product(args.product_id)
        print(f"deleted {args.product_id}")
