from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.adapters.identity import IdentityProviderError
from storefront.api.deps import get_identity
from storefront.db import get_db
from storefront.schemas.user_schema import AdminOut, AdminRegisterIn
from storefront.services.admin_service import (
    AdminConflictError,
    AdminPermissionError,
    AdminRegistrationError,
    AdminService,
)
from storefront.utils.log_setup import get_logger

log = get_logger("admin")

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/register", status_code=201, summary="Register a new admin (super admins only)")
def register_admin(payload: AdminRegisterIn, db: Session = Depends(get_db), identity=Depends(get_identity)):
    svc = AdminService(db, identity)
    try:
        admin = svc.register_admin(
            email=payload.email,
            password=payload.password,
            name=payload.name,
            role=payload.role,
            current_admin_id=payload.current_admin_id,
        )
    except AdminPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except AdminConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AdminRegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IdentityProviderError as e:
        log.error(f"identity provider rejected registration: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return AdminOut.model_validate(admin).model_dump()
