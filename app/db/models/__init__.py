"""
Database models module.

Imports every model so it is registered with SQLAlchemy's Base.metadata
before table creation and Alembic autogeneration.
"""
from app.db.models.user import User
from app.db.models.counter import Counter

__all__ = [
    "User",
    "Counter",
]
