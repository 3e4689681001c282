from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_uuid_cookie, get_carts
from storefront.cart.store import CartStore
from storefront.db import get_db
from storefront.schemas.order_schema import CheckoutIn, OrderOut
from storefront.services.order_service import EmptyCartError, OrderService, OrderServiceException

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post("", status_code=201, summary="Place an order from the current cart")
def checkout(
    payload: CheckoutIn,
    cart_uuid: Optional[str] = Depends(get_cart_uuid_cookie),
    carts: CartStore = Depends(get_carts),
    db: Session = Depends(get_db),
):
    cart = carts.get(cart_uuid)
    if cart is None or cart.is_empty():
        raise HTTPException(status_code=400, detail="Cart is empty")
    try:
        with carts.lock(cart.cart_uuid):
            order = OrderService(db).checkout(
                cart,
                user_id=payload.user_id,
                shipping_address=payload.shipping_address.model_dump(),
                payment_method=payload.payment_method,
                notes=payload.notes,
            )
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OrderServiceException as e:
        raise HTTPException(status_code=500, detail=str(e))
    return OrderOut.model_validate(order).model_dump()
