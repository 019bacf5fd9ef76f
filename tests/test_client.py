# tests/test_client.py
import httpx
import pytest

from sdk.shop import ShopClient, _parse_fields


@pytest.fixture
def shop(client):
    # the test client speaks the same session API as requests
    return ShopClient(base_url="http://testserver/", session=client)


def test_client_crud_cycle(shop):
    assert len(shop.list_products()) == 3
    created = shop.create_product({"name": "Widget", "price": 9.99})
    assert created["id"] == 4
    assert shop.get_product(4) == created
    assert shop.update_product(4, {"name": "Gadget"})["name"] == "Gadget"
    assert shop.patch_product(4, {"price": 1, "id": 2}) == {"id": 4, "name": "Gadget", "price": 1}
    shop.delete_product(4)
    assert len(shop.list_products()) == 3


def test_client_raises_on_missing_product(shop):
    with pytest.raises(httpx.HTTPStatusError):
        shop.get_product(42)


def test_parse_fields():
    assert _parse_fields(["name=Widget", "price=9.99", "quantity=3"]) == {
        "name": "Widget", "price": 9.99, "quantity": 3,
    }
    with pytest.raises(SystemExit):
        _parse_fields(["oops"])
