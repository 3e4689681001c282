from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.db import engine

router = APIRouter()


@router.get("/health", tags=["health"])
def health(request: Request):
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except SQLAlchemyError:
        db_ok = False
    identity_ok = request.app.state.identity.health_check()

    return {
        "status": "ok" if db_ok and identity_ok else "degraded",
        "db": db_ok,
        "identity_provider": identity_ok,
    }
