from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.cart.engine import Cart
from storefront.utils.money import round_money


class AddItemIn(BaseModel):
    product_id: int
    quantity: int = Field(1, ge=1)
    variant: str = ""


class UpdateQuantityIn(BaseModel):
    # range is enforced by the cart, which ignores out-of-range values
    quantity: int


class CouponIn(BaseModel):
    code: str = ""


class CartItemOut(BaseModel):
    id: str
    product_id: Optional[int] = None
    name: str
    price: float
    quantity: int
    variant: str
    image: Optional[str] = None
    line_total: float


class CartOut(BaseModel):
    cart_uuid: str
    items: List[CartItemOut]
    item_count: int
    discount: Optional[int] = None
    coupon_applied: bool
    subtotal: float
    tax: float
    shipping: float
    discount_amount: float
    total: float

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartOut":
        totals = cart.compute_totals()
        return cls(
            cart_uuid=cart.cart_uuid,
            items=[
                CartItemOut(
                    id=it.id,
                    product_id=it.product_id,
                    name=it.name,
                    price=float(round_money(it.price)),
                    quantity=it.quantity,
                    variant=it.variant,
                    image=it.image,
                    line_total=float(round_money(it.line_total)),
                )
                for it in cart.items
            ],
            item_count=cart.item_count,
            discount=cart.discount,
            coupon_applied=cart.coupon_applied,
            **{k: float(round_money(v)) for k, v in totals.as_dict().items()},
        )
