import pytest
from fastapi.testclient import TestClient

from storefront.db import init_db
from storefront.main import app

client = TestClient(app)


@pytest.fixture(scope="module", autouse=True)
def setup_db():
    init_db(reset=True)
    client.cookies.clear()
    yield


def test_add_item_to_cart():
    res = client.post("/api/cart/items", json={"product_id": "1"})
    assert res.status_code == 200
    body = res.json()
    assert "cart_uuid" in body
    assert body["quantity"] == 1


def test_adding_same_product_increments_quantity():
    res = client.post("/api/cart/items", json={"product_id": "1", "qty": 2})
    assert res.status_code == 200
    assert res.json()["quantity"] == 3

    cart = client.get("/api/cart").json()
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 3
    assert cart["subtotal"] == 15000


def test_update_quantity_never_below_one():
    res = client.patch("/api/cart/items/1", json={"quantity": 0})
    assert res.status_code == 200
    assert res.json()["quantity"] == 1


def test_unknown_product():
    res = client.post("/api/cart/items", json={"product_id": "nope"})
    assert res.status_code == 404


def test_checkout_through_api_then_cart_is_empty():
    client.post("/api/cart/items", json={"product_id": "4", "qty": 2})
    res = client.post(
        "/api/checkout",
        json={
            "customer_name": "0812-3456-7890",
            "customer_address": "Jl. Kenanga No. 10",
            "discount": "10000",
            "paid_amount": "50000",
        },
    )
    assert res.status_code == 200
    body = res.json()
    tx = body["transaction"]
    # 1 x 5000 + 2 x 85000 - 10000
    assert tx["total_amount"] == 165000
    assert tx["status"] == "DP"
    assert body["invoice"]["remaining"] == 115000

    cart = client.get("/api/cart").json()
    assert cart["items"] == []


def test_checkout_requires_address():
    client.post("/api/cart/items", json={"product_id": "2"})
    res = client.post("/api/checkout", json={"customer_name": "Rini", "customer_address": ""})
    assert res.status_code == 400
    assert len(client.get("/api/cart").json()["items"]) == 1


def test_remove_item():
    res = client.delete("/api/cart/items/2")
    assert res.status_code == 200
    assert client.get("/api/cart").json()["items"] == []
