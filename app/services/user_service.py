"""
User provisioning and authentication.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import InvalidCredentialsError, UserNotFoundError
from app.core.security import hash_password, verify_password
from app.db.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    # Exact match: emails are case-sensitive login keys
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> User:
    """
    Fetch a user by id.

    Raises:
        UserNotFoundError: If no such user exists
    """
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def ensure_default_user(
    db: Session,
    email: str = None,
    password: str = None,
) -> User:
    """
    Upsert the default account keyed by email.

    An existing row is returned untouched (its password is not reset), so the
    call is safe to repeat.
    """
    email = email or config.DEFAULT_USER_EMAIL
    password = password or config.DEFAULT_USER_PASSWORD

    user = get_user_by_email(db, email)
    if user:
        logger.info(f"Default user already exists: id={user.id}")
        return user

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another setup call inserted the same email first
        db.rollback()
        user = get_user_by_email(db, email)
        logger.info(f"Default user created concurrently: id={user.id}")
        return user

    db.refresh(user)
    logger.info(f"Default user created: id={user.id}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Check credentials.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login failed: invalid credentials")
        raise InvalidCredentialsError()

    logger.info(f"Login successful: user_id={user.id}")
    return user
