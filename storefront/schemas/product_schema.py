from typing import Optional

from pydantic import BaseModel, ConfigDict


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    parent_id: Optional[int] = None


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    discount: int = 0
    category_id: Optional[int] = None
    brand: Optional[str] = None
    stock: int
    rating: float = 0
    review_count: int = 0
    is_new: bool = False
    is_best_seller: bool = False
    image_url: Optional[str] = None
