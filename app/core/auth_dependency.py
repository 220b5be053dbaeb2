"""
Request-scoped dependencies: database session and caller identity.

The caller identifies itself with a plain integer ``x-user-id`` header.
When an ``Authorization: Bearer`` token from /login is also sent, its
subject must name the same user.
"""
import logging
from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.core.errors import UserNotFoundError
from app.core.security import decode_access_token
from app.db.models.user import User
from app.db.session import SessionLocal
from app.services.user_service import get_user

logger = logging.getLogger(__name__)

# users.id is a 32-bit INTEGER column; anything wider cannot name a user
MAX_USER_ID = 2 ** 31 - 1


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_user_id(
    x_user_id: Optional[str] = Header(default=None),
    authorization: Optional[str] = Header(default=None),
) -> int:
    """Parse x-user-id; 400 if missing or not an integer, 401 on a bad bearer token."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="x-user-id header required")

    try:
        user_id = int(x_user_id.strip())
        if not -MAX_USER_ID <= user_id <= MAX_USER_ID:
            raise ValueError(f"x-user-id out of range: {x_user_id}")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="x-user-id header must be an integer"
        )

    if authorization:
        scheme, _, token = authorization.partition(" ")
        subject = decode_access_token(token) if scheme.lower() == "bearer" else None
        if subject is None or subject != str(user_id):
            logger.warning(f"Bearer token rejected for x-user-id={user_id}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    return user_id


def get_current_user(
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db)
) -> User:
    """Resolve x-user-id to a User, 404 if there is none."""
    try:
        return get_user(db, user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
