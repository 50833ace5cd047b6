import secrets
from core.database import SessionLocal
from typing import Annotated, Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
from starlette import status
from core.config import settings
from repositories.order_repository import OrderRepository, SqlAlchemyOrderRepository

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]


def get_order_repository(db: db_dependency) -> OrderRepository:
    return SqlAlchemyOrderRepository(db)

repository_dependency = Annotated[OrderRepository, Depends(get_order_repository)]


def require_admin(x_admin_key: Annotated[Optional[str], Header()] = None):
    """
    Guards staff-only routes (listing, status changes, summaries).

    With no ADMIN_API_KEY configured the routes stay open.
    """
    expected = settings.ADMIN_API_KEY
    if not expected:
        return None

    if x_admin_key is None or not secrets.compare_digest(x_admin_key, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Invalid or missing admin key.")
    return x_admin_key


admin_dependency = Annotated[Optional[str], Depends(require_admin)]
