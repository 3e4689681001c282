from fastapi import Request

from storefront.cart.store import CartStore

CART_COOKIE = "cart_uuid"


def get_carts(request: Request) -> CartStore:
    return request.app.state.carts


def get_identity(request: Request):
    return request.app.state.identity


def get_cart_uuid_cookie(request: Request):
    return request.cookies.get(CART_COOKIE)
