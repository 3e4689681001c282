import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from storefront.config import settings
from storefront.utils.money import to_decimal


class CartError(Exception):
    pass


class EmptyCouponError(CartError):
    """Raised when the submitted coupon code is blank."""

    def __init__(self, message: str = "Please enter a coupon code"):
        super().__init__(message)


class InvalidCouponError(CartError):
    """Raised when the coupon code is not recognised. The cart is untouched."""

    def __init__(self, message: str = "Invalid coupon code"):
        super().__init__(message)


def line_item_id(product_id, variant: str = "") -> str:
    """One line per product+variant."""
    variant = (variant or "").strip()
    return f"{product_id}:{variant}" if variant else str(product_id)


class CartLineItem:
    def __init__(
        self,
        id: str,
        name: str,
        price,
        quantity: int = 1,
        variant: str = "",
        image: Optional[str] = None,
        product_id: Optional[int] = None,
    ):
        price = to_decimal(price)
        if price < 0:
            raise ValueError("Price must not be negative")
        self.id = str(id)
        self.name = name
        self.price = price
        self.quantity = quantity
        self.variant = variant or ""
        self.image = image
        self.product_id = product_id

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def __repr__(self):
        return f"<CartLineItem id={self.id} qty={self.quantity}>"


class CartTotals:
    def __init__(self, subtotal: Decimal, tax: Decimal, shipping: Decimal, discount_amount: Decimal):
        self.subtotal = subtotal
        self.tax = tax
        self.shipping = shipping
        self.discount_amount = discount_amount
        # no floor: a stale discount can push this below zero
        self.total = subtotal + tax + shipping - discount_amount

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shipping": self.shipping,
            "discount_amount": self.discount_amount,
            "total": self.total,
        }


class Cart:
    """
    A shopper's cart for one session.

    discount_amount is captured when the coupon is applied and is not
    recomputed afterwards, so later quantity changes or removals leave it at
    the value derived from the subtotal at application time.
    """

    def __init__(self, items: Optional[Iterable[CartLineItem]] = None, cart_uuid: Optional[str] = None):
        self.cart_uuid = cart_uuid or uuid.uuid4().hex
        self.items: List[CartLineItem] = list(items or [])
        self.discount: Optional[int] = None
        self.discount_amount: Optional[Decimal] = None
        self.coupon_applied = False
        self.last_touched = datetime.now(timezone.utc)

    @classmethod
    def from_records(cls, records: Iterable[dict], cart_uuid: Optional[str] = None) -> "Cart":
        """
        Seed a cart from {id, name, price, image, quantity, variant} records.

        The record id is the product id, so seeded lines share their keys with
        add_item(). Records for the same product+variant are merged. Raises
        ValueError when a quantity (or a merged quantity) is outside the
        allowed range.
        """
        cart = cls(cart_uuid=cart_uuid)
        for r in records:
            product_id = r.get("product_id", r["id"])
            variant = r.get("variant", "")
            quantity = r.get("quantity", 1)
            if not cart._quantity_allowed(quantity):
                raise ValueError(f"Invalid quantity {quantity!r} for product {product_id}")
            item_id = line_item_id(product_id, variant)
            existing = cart._find(item_id)
            if existing:
                merged = existing.quantity + quantity
                if not cart._quantity_allowed(merged):
                    raise ValueError(f"Invalid quantity {merged!r} for product {product_id}")
                existing.quantity = merged
                continue
            cart.items.append(
                CartLineItem(
                    id=item_id,
                    name=r["name"],
                    price=r["price"],
                    quantity=quantity,
                    variant=variant,
                    image=r.get("image"),
                    product_id=product_id if isinstance(product_id, int) and not isinstance(product_id, bool) else None,
                )
            )
        return cart

    def touch(self):
        self.last_touched = datetime.now(timezone.utc)

    def _find(self, item_id: str) -> Optional[CartLineItem]:
        return next((it for it in self.items if it.id == str(item_id)), None)

    def _quantity_allowed(self, quantity) -> bool:
        # bool is an int subclass but never a quantity
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            return False
        return settings.MIN_QUANTITY <= quantity <= settings.MAX_QUANTITY

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self.items)

    def is_empty(self) -> bool:
        return not self.items

    def add_item(
        self,
        product_id,
        name: str,
        price,
        quantity: int = 1,
        variant: str = "",
        image: Optional[str] = None,
    ) -> Optional[CartLineItem]:
        item_id = line_item_id(product_id, variant)
        existing = self._find(item_id)
        if existing:
            self.update_quantity(item_id, existing.quantity + quantity)
            return existing
        if not self._quantity_allowed(quantity):
            return None
        item = CartLineItem(
            id=item_id,
            name=name,
            price=price,
            quantity=quantity,
            variant=variant,
            image=image,
            product_id=product_id if isinstance(product_id, int) else None,
        )
        self.items.append(item)
        self.touch()
        return item

    def update_quantity(self, item_id: str, new_quantity) -> None:
        # out-of-range quantities are ignored, not rejected
        if not self._quantity_allowed(new_quantity):
            return
        item = self._find(item_id)
        if item is None:
            return
        item.quantity = new_quantity
        self.touch()

    def remove_item(self, item_id: str) -> None:
        item = self._find(item_id)
        if item is None:
            return
        self.items.remove(item)
        self.touch()

    def clear(self) -> None:
        self.items = []
        self.discount = None
        self.discount_amount = None
        self.coupon_applied = False
        self.touch()

    def subtotal(self) -> Decimal:
        return sum((it.line_total for it in self.items), Decimal("0"))

    def apply_coupon(self, code: str) -> Decimal:
        """
        Apply a coupon code and return the discount amount it unlocked.

        Raises EmptyCouponError for a blank code and InvalidCouponError for an
        unknown one; in both cases any earlier discount is kept as is.
        """
        if code is None or not code.strip():
            raise EmptyCouponError()
        if code.strip().upper() != settings.COUPON_CODE.upper():
            raise InvalidCouponError()

        percent = settings.COUPON_PERCENT
        self.discount = percent
        self.discount_amount = self.subtotal() * Decimal(percent) / Decimal(100)
        self.coupon_applied = True
        self.touch()
        return self.discount_amount

    def compute_totals(self) -> CartTotals:
        subtotal = self.subtotal()
        tax = subtotal * settings.TAX_RATE
        # strictly greater: exactly the threshold still pays shipping
        shipping = Decimal("0") if subtotal > settings.FREE_SHIPPING_THRESHOLD else settings.FLAT_SHIPPING
        discount_amount = self.discount_amount if self.discount_amount is not None else Decimal("0")
        return CartTotals(subtotal, tax, shipping, discount_amount)
