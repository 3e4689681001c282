from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product_schema import CategoryOut, ProductOut

router = APIRouter(tags=["catalogue"])
categories_router = APIRouter(tags=["catalogue"])


@router.get("", summary="List products")
def list_products(
    q: Optional[str] = Query(None, description="search term"),
    category: Optional[str] = Query(None, description="category slug"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
):
    repo = ProductRepository(db)
    items, total = repo.list(q=q, category=category, page=page, size=size)
    return {
        "items": [ProductOut.model_validate(p).model_dump() for p in items],
        "total": total,
    }


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: int, db: Session = Depends(get_db)):
    p = ProductRepository(db).get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut.model_validate(p).model_dump()


@categories_router.get("", summary="List categories")
def list_categories(db: Session = Depends(get_db)):
    return [CategoryOut.model_validate(c).model_dump() for c in CategoryRepository(db).list()]
