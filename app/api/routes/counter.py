"""
Today's counter for the calling user.

Every endpoint resolves the caller from the x-user-id header and the
day from the server clock (UTC).
"""
import logging
from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_user, get_db
from app.db.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.counter import CounterResponse
from app.services import counter_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/counter", tags=["Counter"])


def get_today() -> date:
    """Day dependency, overridable in tests."""
    return counter_service.today_utc()


@router.get("", response_model=CounterResponse)
def read_counter(
    user: User = Depends(get_current_user),
    today: date = Depends(get_today),
    db: Session = Depends(get_db)
):
    counter = counter_service.get_or_create_counter(db, user.id, today)
    return {"count": counter.count}


@router.post("", response_model=CounterResponse)
def increment_counter(
    user: User = Depends(get_current_user),
    today: date = Depends(get_today),
    db: Session = Depends(get_db)
):
    count = counter_service.increment_counter(db, user.id, today)
    return {"count": count}


@router.post("/reset", response_model=MessageResponse)
def reset_counter(
    user: User = Depends(get_current_user),
    today: date = Depends(get_today),
    db: Session = Depends(get_db)
):
    counter_service.reset_counter(db, user.id, today)
    return {"message": "Counter reset successfully"}
