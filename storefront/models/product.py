from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from storefront.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    slug = Column(String(256), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    original_price = Column(Numeric(10, 2), nullable=True)
    discount = Column(Integer, nullable=False, default=0)  # percent off original_price
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    brand = Column(String(128), nullable=True)
    stock = Column(Integer, default=0, nullable=False)
    rating = Column(Float, default=0, nullable=False)
    review_count = Column(Integer, default=0, nullable=False)
    is_new = Column(Boolean, default=False, nullable=False)
    is_best_seller = Column(Boolean, default=False, nullable=False)
    image_url = Column(String(512), nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="products")

    def __repr__(self):
        return f"<Product slug={self.slug} name={self.name}>"
