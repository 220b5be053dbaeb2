"""
Daily counter service.

Find-or-create, increment and reset of the (user, UTC day) counter.

Increments are a single ``UPDATE counters SET count = count + 1`` so two
overlapping requests can never both read the same stale value. The first
increment of a day inserts the row; if a concurrent request wins that insert,
the unique constraint on (user_id, date) rejects ours and we retry as an
update.
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.counter import Counter

logger = logging.getLogger(__name__)

INCREMENT_ATTEMPTS = 2


def today_utc() -> date:
    """Current calendar day at the UTC boundary."""
    return datetime.now(timezone.utc).date()


def find_counter(db: Session, user_id: int, day: date) -> Optional[Counter]:
    return db.query(Counter).filter(Counter.user_id == user_id, Counter.date == day).first()


def get_or_create_counter(db: Session, user_id: int, day: Optional[date] = None) -> Counter:
    """
    Return the counter for user_id on day, creating it with count 0 if absent.

    Args:
        db: Database session
        user_id: Owner of the counter (must exist)
        day: Calendar day, defaults to today (UTC)
    """
    day = day or today_utc()
    counter = find_counter(db, user_id, day)
    if counter:
        return counter

    counter = Counter(user_id=user_id, date=day, count=0)
    db.add(counter)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        counter = find_counter(db, user_id, day)
        logger.info(f"Counter created concurrently: user_id={user_id}, date={day}")
        return counter

    db.refresh(counter)
    logger.info(f"Counter created: user_id={user_id}, date={day}")
    return counter


def increment_counter(db: Session, user_id: int, day: Optional[date] = None) -> int:
    """
    Advance the counter for user_id on day by exactly one.

    Returns:
        The count after this increment
    """
    day = day or today_utc()
    where = (Counter.user_id == user_id, Counter.date == day)

    for _ in range(INCREMENT_ATTEMPTS):
        result = db.execute(
            update(Counter)
            .where(*where)
            .values(count=Counter.count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            # Read inside the same transaction: the row stays locked until commit
            count = db.execute(select(Counter.count).where(*where)).scalar_one()
            db.commit()
            logger.debug(f"Counter incremented: user_id={user_id}, date={day}, count={count}")
            return count

        db.add(Counter(user_id=user_id, date=day, count=1))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Lost first-insert race, retrying as update: user_id={user_id}, date={day}")
            continue

        logger.info(f"Counter created by increment: user_id={user_id}, date={day}")
        return 1

    raise RuntimeError(f"Could not increment counter for user {user_id} on {day}")


def reset_counter(db: Session, user_id: int, day: Optional[date] = None) -> bool:
    """
    Set the counter for user_id on day to zero.

    Never creates a row.

    Returns:
        True if a counter existed and was reset, False if there was nothing to reset
    """
    day = day or today_utc()
    result = db.execute(
        update(Counter)
        .where(Counter.user_id == user_id, Counter.date == day)
        .values(count=0)
        .execution_options(synchronize_session=False)
    )
    db.commit()

    existed = bool(result.rowcount)
    logger.info(f"Counter reset: user_id={user_id}, date={day}, existed={existed}")
    return existed
