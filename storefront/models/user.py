from sqlalchemy import Column, DateTime, String, func

from storefront.db import Base


class User(Base):
    __tablename__ = "users"

    # id issued by the identity provider
    id = Column(String(64), primary_key=True)
    email = Column(String(256), unique=True, index=True, nullable=False)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    phone = Column(String(32), nullable=True)
    address_line1 = Column(String(256), nullable=True)
    address_line2 = Column(String(256), nullable=True)
    city = Column(String(128), nullable=True)
    state = Column(String(128), nullable=True)
    postal_code = Column(String(32), nullable=True)
    country = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
