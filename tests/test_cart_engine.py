from decimal import Decimal

import pytest

from storefront.cart.engine import (
    Cart,
    CartLineItem,
    EmptyCouponError,
    InvalidCouponError,
    line_item_id,
)


def _cart(*lines):
    """lines: (id, price, qty)"""
    return Cart(items=[CartLineItem(id=i, name=f"item {i}", price=p, quantity=q) for i, p, q in lines])


def test_subtotal_is_sum_of_price_times_quantity():
    cart = _cart(("a", "19.99", 2), ("b", "5.01", 3), ("c", "0", 1))
    assert cart.compute_totals().subtotal == Decimal("55.01")


def test_subtotal_does_not_depend_on_order():
    forward = _cart(("a", "19.99", 2), ("b", "5.01", 3))
    backward = _cart(("b", "5.01", 3), ("a", "19.99", 2))
    assert forward.compute_totals().subtotal == backward.compute_totals().subtotal


def test_empty_cart_totals():
    totals = Cart().compute_totals()
    assert totals.subtotal == 0
    assert totals.tax == 0
    assert totals.shipping == Decimal("10")
    assert totals.total == Decimal("10")


@pytest.mark.parametrize("bad", [0, 11, -1, 2.5, "3", True])
def test_update_quantity_out_of_range_is_ignored(bad):
    cart = _cart(("a", "10", 4))
    cart.update_quantity("a", bad)
    assert cart.items[0].quantity == 4


def test_update_quantity_bounds_are_inclusive():
    cart = _cart(("a", "10", 4))
    cart.update_quantity("a", 10)
    assert cart.items[0].quantity == 10
    cart.update_quantity("a", 1)
    assert cart.items[0].quantity == 1


def test_update_and_remove_unknown_item_are_noops():
    cart = _cart(("a", "10", 4))
    cart.update_quantity("missing", 2)
    cart.remove_item("missing")
    assert [(it.id, it.quantity) for it in cart.items] == [("a", 4)]


def test_remove_item():
    cart = _cart(("a", "10", 1), ("b", "20", 1))
    cart.remove_item("a")
    assert [it.id for it in cart.items] == ["b"]


def test_apply_coupon_on_100_subtotal():
    cart = _cart(("a", "100.00", 1))
    cart.apply_coupon("SAVE10")
    assert cart.discount == 10
    assert cart.discount_amount == Decimal("10.00")
    assert cart.coupon_applied


def test_apply_coupon_is_case_insensitive():
    cart = _cart(("a", "50", 1))
    cart.apply_coupon("save10")
    assert cart.discount_amount == Decimal("5")


def test_invalid_coupon_keeps_previous_discount():
    cart = _cart(("a", "100.00", 1))
    with pytest.raises(InvalidCouponError):
        cart.apply_coupon("bogus")
    assert cart.discount is None
    assert cart.discount_amount is None

    cart.apply_coupon("SAVE10")
    with pytest.raises(InvalidCouponError):
        cart.apply_coupon("bogus")
    assert cart.discount == 10
    assert cart.discount_amount == Decimal("10.00")


@pytest.mark.parametrize("blank", ["", "   ", "\t"])
def test_blank_coupon(blank):
    cart = _cart(("a", "100.00", 1))
    with pytest.raises(EmptyCouponError):
        cart.apply_coupon(blank)
    assert not cart.coupon_applied


def test_shipping_threshold_is_strict():
    assert _cart(("a", "100.00", 1)).compute_totals().shipping == Decimal("10")
    assert _cart(("a", "100.01", 1)).compute_totals().shipping == Decimal("0")


def test_tax_and_total():
    totals = _cart(("a", "50.00", 1)).compute_totals()
    assert totals.tax == Decimal("4.00")
    assert totals.total == Decimal("64.00")


def test_discount_is_not_recomputed_after_cart_changes():
    cart = _cart(("a", "100.00", 1), ("b", "50.00", 1))
    cart.apply_coupon("SAVE10")
    assert cart.discount_amount == Decimal("15.00")

    cart.remove_item("b")
    cart.update_quantity("a", 3)
    totals = cart.compute_totals()
    assert totals.discount_amount == Decimal("15.00")
    assert totals.subtotal == Decimal("300.00")
    assert totals.total == Decimal("300.00") + Decimal("24.00") - Decimal("15.00")


def test_total_can_go_negative_with_stale_discount():
    cart = _cart(("a", "1000.00", 1), ("b", "1.00", 1))
    cart.apply_coupon("SAVE10")
    cart.remove_item("a")
    totals = cart.compute_totals()
    # 1 + 0.08 + 10 - 100.1
    assert totals.total == Decimal("-89.02")


def test_add_item_merges_same_product_and_variant():
    cart = Cart()
    cart.add_item(1, "Headphones", "74.99", quantity=2, variant="Black")
    cart.add_item(1, "Headphones", "74.99", quantity=3, variant="Black")
    cart.add_item(1, "Headphones", "74.99", quantity=1, variant="White")
    assert [(it.id, it.quantity) for it in cart.items] == [("1:Black", 5), ("1:White", 1)]
    assert cart.item_count == 6


def test_add_item_respects_quantity_cap():
    cart = Cart()
    cart.add_item(1, "Headphones", "74.99", quantity=8)
    cart.add_item(1, "Headphones", "74.99", quantity=5)
    assert cart.items[0].quantity == 8
    assert cart.add_item(2, "Watch", "64.99", quantity=11) is None
    assert len(cart.items) == 1


def test_clear_resets_discount():
    cart = _cart(("a", "100.00", 1))
    cart.apply_coupon("SAVE10")
    cart.clear()
    assert cart.is_empty()
    assert cart.discount_amount is None
    assert not cart.coupon_applied


def test_from_records():
    cart = Cart.from_records(
        [
            {"id": 1, "name": "Headphones", "price": 74.99, "image": "h.jpg", "quantity": 1, "variant": "Black"},
            {"id": 9, "name": "Bottle", "price": 12.49, "image": "b.jpg", "quantity": 2, "variant": "Green, 20oz"},
        ]
    )
    assert [it.id for it in cart.items] == ["1:Black", "9:Green, 20oz"]
    assert [it.product_id for it in cart.items] == [1, 9]
    assert cart.compute_totals().subtotal == Decimal("99.97")


def test_from_records_rejects_out_of_range_quantity():
    with pytest.raises(ValueError):
        Cart.from_records([{"id": 1, "name": "Headphones", "price": 74.99, "quantity": 25}])
    with pytest.raises(ValueError):
        Cart.from_records([{"id": 1, "name": "Headphones", "price": 74.99, "quantity": 0}])


def test_from_records_merges_duplicate_lines():
    cart = Cart.from_records(
        [
            {"id": 1, "name": "Headphones", "price": 74.99, "quantity": 2, "variant": "Black"},
            {"id": 1, "name": "Headphones", "price": 74.99, "quantity": 3, "variant": "Black"},
            {"id": 1, "name": "Headphones", "price": 74.99, "quantity": 1, "variant": "White"},
        ]
    )
    assert [(it.id, it.quantity) for it in cart.items] == [("1:Black", 5), ("1:White", 1)]

    cart.remove_item("1:Black")
    assert [it.id for it in cart.items] == ["1:White"]

    with pytest.raises(ValueError):
        Cart.from_records(
            [
                {"id": 1, "name": "Headphones", "price": 74.99, "quantity": 6},
                {"id": 1, "name": "Headphones", "price": 74.99, "quantity": 5},
            ]
        )


def test_add_item_merges_into_seeded_line():
    cart = Cart.from_records([{"id": 1, "name": "Headphones", "price": 74.99, "quantity": 1, "variant": "Black"}])
    cart.add_item(1, "Headphones", "74.99", quantity=2, variant="Black")
    assert [(it.id, it.quantity) for it in cart.items] == [("1:Black", 3)]


def test_negative_price_rejected():
    with pytest.raises(ValueError):
        CartLineItem(id="x", name="x", price="-1")


def test_line_item_id():
    assert line_item_id(4) == "4"
    assert line_item_id(4, " Blue, Medium ") == "4:Blue, Medium"
