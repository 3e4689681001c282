from sqlalchemy import Column, DateTime, String, func

from storefront.db import Base

ADMIN_ROLES = ("admin", "super_admin")


class Admin(Base):
    __tablename__ = "admins"

    # id issued by the identity provider
    id = Column(String(64), primary_key=True)
    email = Column(String(256), unique=True, index=True, nullable=False)
    name = Column(String(256), nullable=False)
    role = Column(String(32), nullable=False, default="admin")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Admin email={self.email} role={self.role}>"
