from typing import Optional

from sqlalchemy.orm import Session

from storefront.cart.engine import Cart, CartLineItem
from storefront.cart.store import CartStore
from storefront.repositories.product_repo import ProductRepository
from storefront.utils.log_setup import get_logger

log = get_logger("cart")


class CartServiceException(Exception):
    pass


class CouponAlreadyAppliedError(CartServiceException):
    pass


class CartService:
    """
    Glue between a guest's cart, the catalogue and the cart registry.
    Pricing and coupon rules live on Cart itself; every mutation here holds
    the cart's lock so concurrent requests on one cookie apply one at a time.
    """

    def __init__(self, db: Session, carts: CartStore):
        self.db = db
        self.carts = carts
        self.product_repo = ProductRepository(db)

    def get_or_create_cart(self, cart_uuid: Optional[str] = None) -> Cart:
        return self.carts.get_or_create(cart_uuid)

    def add_product(self, cart: Cart, product_id: int, qty: int, variant: str = "") -> Optional[CartLineItem]:
        product = self.product_repo.get(product_id)
        if not product:
            raise CartServiceException("Product not found")
        with self.carts.lock(cart.cart_uuid):
            return cart.add_item(
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=qty,
                variant=variant,
                image=product.image_url,
            )

    def update_quantity(self, cart: Cart, item_id: str, qty: int) -> None:
        with self.carts.lock(cart.cart_uuid):
            cart.update_quantity(item_id, qty)

    def remove_item(self, cart: Cart, item_id: str) -> None:
        with self.carts.lock(cart.cart_uuid):
            cart.remove_item(item_id)

    def apply_coupon(self, cart: Cart, code: str):
        with self.carts.lock(cart.cart_uuid):
            # one coupon per cart; repeats stop here and never reach the cart
            if cart.coupon_applied:
                raise CouponAlreadyAppliedError("A coupon has already been applied to this cart")
            amount = cart.apply_coupon((code or "").strip())
        log.info(f"coupon applied to cart {cart.cart_uuid}: -{amount}")
        return amount
