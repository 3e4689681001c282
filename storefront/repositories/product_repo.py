from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.models.category import Category
from storefront.models.product import Product


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.active == True)
            .first()
        )

    def get_by_slug(self, slug: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.slug == slug).first()

    def list(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        size: int = 20,
    ) -> Tuple[List[Product], int]:
        query = self.db.query(Product).filter(Product.active == True)
        if q:
            like = f"%{q}%"
            query = query.filter(
                (Product.name.ilike(like)) | (Product.description.ilike(like))
            )
        if category:
            query = query.join(Category).filter(Category.slug == category)
        total = query.with_entities(func.count()).scalar() or 0
        items = query.order_by(Product.name).offset((page - 1) * size).limit(size).all()
        return items, total

    def create_or_update(
        self,
        slug: str,
        name: str,
        price: Decimal,
        stock: int = 0,
        description: str = None,
        image_url: str = None,
        category_id: int = None,
        brand: str = None,
    ) -> Product:
        p = self.get_by_slug(slug)
        if p:
            p.name = name
            p.price = price
            p.stock = stock
            p.description = description
            p.image_url = image_url
            p.category_id = category_id
            p.brand = brand
        else:
            p = Product(
                slug=slug,
                name=name,
                price=price,
                stock=stock,
                description=description,
                image_url=image_url,
                category_id=category_id,
                brand=brand,
            )
            self.db.add(p)
        self.db.flush()
        return p
