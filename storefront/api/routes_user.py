from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user_schema import UserOut

router = APIRouter(prefix="/api/user", tags=["users"])


@router.get("/{user_id}", summary="Get user profile")
def get_user(user_id: str, db: Session = Depends(get_db)):
    u = UserRepository(db).get(user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(u).model_dump()
