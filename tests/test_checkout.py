from storefront.db import SessionLocal
from storefront.models.order import Order
from storefront.models.product import Product


def _product_id(slug):
    db = SessionLocal()
    try:
        return db.query(Product).filter(Product.slug == slug).first().id
    finally:
        db.close()


def test_checkout_empty_cart(client):
    client.get("/api/cart")
    res = client.post("/api/checkout", json={})
    assert res.status_code == 400
    assert res.json()["detail"] == "Cart is empty"


def test_checkout_persists_totals_and_clears_cart(client):
    pid = _product_id("stainless-steel-water-bottle")
    client.post("/api/cart/items", json={"product_id": pid, "quantity": 4, "variant": "Green, 20oz"})
    client.post("/api/cart/coupon", json={"code": "SAVE10"})

    payload = {
        "user_id": "user-checkout-1",
        "shipping_address": {"shipping_city": "Springfield", "shipping_country": "US"},
        "payment_method": "card",
    }
    res = client.post("/api/checkout", json=payload)
    assert res.status_code == 201
    body = res.json()
    # 50.00 subtotal, 4.00 tax, 10 shipping, 5.00 off
    assert body["subtotal"] == 50.0
    assert body["tax"] == 4.0
    assert body["shipping"] == 10.0
    assert body["discount"] == 5.0
    assert body["total"] == 59.0
    assert body["status"] == "pending"
    assert body["shipping_city"] == "Springfield"
    assert body["items"][0]["variant"] == "Green, 20oz"
    assert body["items"][0]["quantity"] == 4

    cart = client.get("/api/cart").json()
    assert cart["items"] == []
    assert cart["coupon_applied"] is False

    db = SessionLocal()
    try:
        assert db.query(Order).filter(Order.user_id == "user-checkout-1").count() == 1
    finally:
        db.close()
