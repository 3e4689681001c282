from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from storefront.api.deps import CART_COOKIE, get_cart_uuid_cookie, get_carts
from storefront.cart.engine import Cart, CartError
from storefront.cart.store import CartStore
from storefront.db import get_db
from storefront.schemas.cart_schema import AddItemIn, CartOut, CouponIn, UpdateQuantityIn
from storefront.services.cart_service import (
    CartService,
    CartServiceException,
    CouponAlreadyAppliedError,
)

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_response(cart: Cart, response: Response) -> CartOut:
    response.set_cookie(CART_COOKIE, cart.cart_uuid, httponly=False, samesite="Lax")
    return CartOut.from_cart(cart)


@router.get("", summary="Get cart with totals")
def get_cart(
    response: Response,
    cart_uuid: Optional[str] = Depends(get_cart_uuid_cookie),
    carts: CartStore = Depends(get_carts),
    db: Session = Depends(get_db),
):
    cart = CartService(db, carts).get_or_create_cart(cart_uuid)
    return _cart_response(cart, response)


@router.post("/items", summary="Add a product to the cart")
def add_item(
    payload: AddItemIn,
    response: Response,
    cart_uuid: Optional[str] = Depends(get_cart_uuid_cookie),
    carts: CartStore = Depends(get_carts),
    db: Session = Depends(get_db),
):
    svc = CartService(db, carts)
    cart = svc.get_or_create_cart(cart_uuid)
    try:
        svc.add_product(cart, payload.product_id, payload.quantity, payload.variant)
    except CartServiceException as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _cart_response(cart, response)


@router.patch("/items/{item_id}", summary="Change a line's quantity")
def update_quantity(
    item_id: str,
    payload: UpdateQuantityIn,
    response: Response,
    cart_uuid: Optional[str] = Depends(get_cart_uuid_cookie),
    carts: CartStore = Depends(get_carts),
    db: Session = Depends(get_db),
):
    svc = CartService(db, carts)
    cart = svc.get_or_create_cart(cart_uuid)
    svc.update_quantity(cart, item_id, payload.quantity)
    return _cart_response(cart, response)


@router.delete("/items/{item_id}", summary="Remove a line")
def remove_item(
    item_id: str,
    response: Response,
    cart_uuid: Optional[str] = Depends(get_cart_uuid_cookie),
    carts: CartStore = Depends(get_carts),
    db: Session = Depends(get_db),
):
    svc = CartService(db, carts)
    cart = svc.get_or_create_cart(cart_uuid)
    svc.remove_item(cart, item_id)
    return _cart_response(cart, response)


@router.post("/coupon", summary="Apply a coupon code")
def apply_coupon(
    payload: CouponIn,
    response: Response,
    cart_uuid: Optional[str] = Depends(get_cart_uuid_cookie),
    carts: CartStore = Depends(get_carts),
    db: Session = Depends(get_db),
):
    svc = CartService(db, carts)
    cart = svc.get_or_create_cart(cart_uuid)
    try:
        svc.apply_coupon(cart, payload.code)
    except CouponAlreadyAppliedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except CartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _cart_response(cart, response)
