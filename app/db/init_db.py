"""
Schema creation and startup connectivity check.
"""
import logging
from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.db.session import engine as default_engine
from app.db.base import Base
import app.db.models  # noqa: F401  registers models on Base.metadata

logger = logging.getLogger(__name__)


def init_db(engine: Engine = None) -> None:
    """
    Create missing tables and verify the store answers.

    Raises whatever the driver raises; callers at startup let it propagate
    so the service exits instead of serving 500s.
    """
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info(f"Database ready ({engine.url.get_backend_name()})")
