from fastapi.testclient import TestClient

from storefront.db import SessionLocal
from storefront.main import app
from storefront.models.user import User

client = TestClient(app)


def setup_module(module):
    db = SessionLocal()
    try:
        if not db.query(User).filter(User.id == "user-orders-1").first():
            db.add(User(id="user-orders-1", email="shopper@example.com", first_name="Sam"))
            db.commit()
    finally:
        db.close()


def test_get_user():
    res = client.get("/api/user/user-orders-1")
    assert res.status_code == 200
    assert res.json()["email"] == "shopper@example.com"
    assert client.get("/api/user/nobody").status_code == 404


def test_create_and_list_orders():
    payload = {
        "user_id": "user-orders-1",
        "subtotal": 20,
        "tax": 1.6,
        "shipping": 10,
        "total": 31.6,
        "payment_method": "card",
        "items": [{"product_id": 1, "name": "Thing", "quantity": 2, "price": 10}],
    }
    res = client.post("/api/orders", json=payload)
    assert res.status_code == 201
    created = res.json()
    assert created["total"] == 31.6
    assert created["items"][0]["quantity"] == 2

    res = client.get("/api/orders/user-orders-1")
    assert res.status_code == 200
    assert created["id"] in [o["id"] for o in res.json()]


def test_create_order_validates_items():
    res = client.post("/api/orders", json={"items": [{"quantity": 0, "price": 1}]})
    assert res.status_code == 422
