from datetime import datetime, timedelta, timezone

from storefront.cart.store import CartStore


def test_get_or_create_reuses_known_cart():
    store = CartStore()
    cart = store.get_or_create()
    assert store.get_or_create(cart.cart_uuid) is cart
    assert len(store) == 1


def test_unknown_uuid_gets_a_fresh_cart():
    store = CartStore()
    cart = store.get_or_create("not-a-real-cart")
    assert cart.cart_uuid != "not-a-real-cart"
    assert store.get("not-a-real-cart") is None


def test_expire_idle_drops_only_stale_carts():
    store = CartStore()
    fresh = store.get_or_create()
    stale = store.get_or_create()
    stale.last_touched = datetime.now(timezone.utc) - timedelta(hours=2)

    expired = store.expire_idle(ttl_seconds=3600)
    assert expired == [stale.cart_uuid]
    assert store.get(fresh.cart_uuid) is fresh
    assert store.get(stale.cart_uuid) is None


def test_drop():
    store = CartStore()
    cart = store.get_or_create()
    store.drop(cart.cart_uuid)
    store.drop("missing")
    assert len(store) == 0
