from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.models.admin import ADMIN_ROLES, Admin
from storefront.repositories.user_repo import AdminRepository
from storefront.utils.log_setup import get_logger

log = get_logger("admin")

MIN_PASSWORD_LENGTH = 6


class AdminRegistrationError(Exception):
    pass


class AdminPermissionError(AdminRegistrationError):
    pass


class AdminConflictError(AdminRegistrationError):
    pass


class AdminService:
    def __init__(self, db: Session, identity):
        self.db = db
        self.identity = identity
        self.admin_repo = AdminRepository(db)

    def register_admin(
        self,
        email: str,
        password: str,
        name: str,
        role: str,
        current_admin_id: Optional[str],
    ) -> Admin:
        """
        Create a new admin account on behalf of an existing super admin.

        The login itself is created with the identity provider; this service
        only records the admin profile and role.
        """
        current = self.admin_repo.get(current_admin_id) if current_admin_id else None
        if not current or current.role != "super_admin":
            raise AdminPermissionError("Only super admins can register new admins")

        email = (email or "").strip().lower()
        name = (name or "").strip()
        if not email or not password or not name:
            raise AdminRegistrationError("All fields are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AdminRegistrationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if role not in ADMIN_ROLES:
            raise AdminRegistrationError(f"Role must be one of: {', '.join(ADMIN_ROLES)}")
        if self.admin_repo.get_by_email(email):
            raise AdminConflictError("An admin with this email already exists")

        log.info(f"registering admin {email} ({role}) by {current.email}")
        # IdentityProviderError propagates to the caller untouched
        account = self.identity.create_user(email, password, {"name": name, "role": role})

        try:
            admin = self.admin_repo.create(account["id"], email, name, role)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AdminConflictError("An admin with this email already exists") from e
        return admin
