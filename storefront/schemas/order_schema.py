from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderItemIn(BaseModel):
    product_id: Optional[int] = None
    name: Optional[str] = None
    variant: Optional[str] = None
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class ShippingAddress(BaseModel):
    shipping_address_line1: Optional[str] = None
    shipping_address_line2: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_state: Optional[str] = None
    shipping_postal_code: Optional[str] = None
    shipping_country: Optional[str] = None


class OrderIn(ShippingAddress):
    user_id: Optional[str] = None
    status: str = "pending"
    subtotal: float = 0
    discount: float = 0
    tax: float = 0
    shipping: float = 0
    total: float = 0
    payment_method: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    items: List[OrderItemIn] = []


class CheckoutIn(BaseModel):
    user_id: Optional[str] = None
    shipping_address: ShippingAddress = ShippingAddress()
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class OrderItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    product_id: Optional[int] = None
    name: Optional[str] = None
    variant: Optional[str] = None
    quantity: int
    price: float


class OrderOut(ShippingAddress):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: Optional[str] = None
    status: str
    subtotal: float
    discount: float
    tax: float
    shipping: float
    total: float
    payment_method: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemOut] = []
