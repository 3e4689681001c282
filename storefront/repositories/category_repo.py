from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.category import Category


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.slug == slug).first()

    def get_or_create(self, slug: str, name: str) -> Category:
        c = self.get_by_slug(slug)
        if not c:
            c = Category(slug=slug, name=name)
            self.db.add(c)
            self.db.flush()
        return c
