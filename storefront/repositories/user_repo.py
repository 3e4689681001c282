from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.admin import Admin
from storefront.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()


class AdminRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, admin_id: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.email == email).first()

    def create(self, admin_id: str, email: str, name: str, role: str) -> Admin:
        a = Admin(id=admin_id, email=email, name=name, role=role)
        self.db.add(a)
        self.db.flush()
        return a
