from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.cart.engine import Cart
from storefront.models.order import Order
from storefront.repositories.order_repo import OrderRepository
from storefront.utils.log_setup import get_logger
from storefront.utils.money import round_money

log = get_logger("orders")

ADDRESS_FIELDS = (
    "shipping_address_line1",
    "shipping_address_line2",
    "shipping_city",
    "shipping_state",
    "shipping_postal_code",
    "shipping_country",
)


class OrderServiceException(Exception):
    pass


class EmptyCartError(OrderServiceException):
    pass


class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.order_repo = OrderRepository(db)

    def list_for_user(self, user_id: str) -> List[Order]:
        return self.order_repo.list_for_user(user_id)

    def create_order(self, fields: Dict, items: List[Dict]) -> Order:
        """
        Insert an order exactly as the client describes it.
        fields: order columns (user_id, status, amounts, address, ...)
        items: list of {product_id, name, variant, quantity, price}
        """
        try:
            order = self.order_repo.create(fields, items)
            self.db.commit()
            self.db.refresh(order)
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error(f"Error creating order: {e}")
            raise OrderServiceException("Error creating order") from e
        return order

    def checkout(
        self,
        cart: Cart,
        user_id: Optional[str] = None,
        shipping_address: Optional[Dict] = None,
        payment_method: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Order:
        """
        Turn the session cart into a pending order priced from its current
        totals (including any coupon discount), then empty the cart.
        """
        if cart.is_empty():
            raise EmptyCartError("Cart is empty")

        totals = cart.compute_totals()
        fields = {
            "user_id": user_id,
            "status": "pending",
            "subtotal": round_money(totals.subtotal),
            "discount": round_money(totals.discount_amount),
            "tax": round_money(totals.tax),
            "shipping": round_money(totals.shipping),
            "total": round_money(totals.total),
            "payment_method": payment_method,
            "notes": notes,
        }
        for key in ADDRESS_FIELDS:
            fields[key] = (shipping_address or {}).get(key)

        items = [
            {
                "product_id": it.product_id,
                "name": it.name,
                "variant": it.variant or None,
                "quantity": it.quantity,
                "price": round_money(it.price),
            }
            for it in cart.items
        ]
        order = self.create_order(fields, items)
        log.info(f"cart {cart.cart_uuid} checked out as order {order.id} total={order.total}")
        cart.clear()
        return order
