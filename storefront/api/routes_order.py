from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.schemas.order_schema import OrderIn, OrderOut
from storefront.services.order_service import OrderService, OrderServiceException

router = APIRouter()


@router.get("/{user_id}", summary="List a user's orders")
def list_orders(user_id: str, db: Session = Depends(get_db)):
    orders = OrderService(db).list_for_user(user_id)
    return [OrderOut.model_validate(o).model_dump() for o in orders]


@router.post("", status_code=201, summary="Create order")
def create_order(payload: OrderIn, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude={"items"})
    items = [it.model_dump() for it in payload.items]
    try:
        order = OrderService(db).create_order(fields, items)
    except OrderServiceException as e:
        raise HTTPException(status_code=500, detail=str(e))
    return OrderOut.model_validate(order).model_dump()
