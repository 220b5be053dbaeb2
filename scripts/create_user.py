"""
Provision an account (or the default one) without going through GET /setup.
Run: python -m scripts.create_user [email] [password]
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from app.core import config
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.services.user_service import ensure_default_user

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_user(email: str, password: str) -> bool:
    """Create the user if missing. An existing user keeps its password."""
    init_db()
    db = SessionLocal()
    try:
        user = ensure_default_user(db, email, password)
        logger.info(f"User {user.email} ready (ID: {user.id})")
        return True
    except Exception:
        db.rollback()
        logger.exception(f"Error provisioning user {email}")
        return False
    finally:
        db.close()


if __name__ == "__main__":
    email = sys.argv[1] if len(sys.argv) > 1 else config.DEFAULT_USER_EMAIL
    password = sys.argv[2] if len(sys.argv) > 2 else config.DEFAULT_USER_PASSWORD

    if not create_user(email, password):
        print(f"\n[ERROR] Failed to provision user {email}")
        sys.exit(1)
    print(f"\n[SUCCESS] User {email} can now log in")
