from typing import Dict, List

from sqlalchemy.orm import Session, selectinload

from storefront.models.order import Order, OrderItem


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str) -> List[Order]:
        return (
            self.db.query(Order)
            .options(selectinload(Order.items))
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def create(self, fields: Dict, items: List[Dict]) -> Order:
        """
        fields: column values for the order row
        items: list of {product_id, name, variant, quantity, price}
        """
        order = Order(**fields)
        for it in items:
            order.items.append(OrderItem(**it))
        self.db.add(order)
        self.db.flush()
        return order
