from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class Counter(Base):
    """
    Per-user, per-day tally.

    One row per (user_id, date); the unique constraint lets the service
    increment with a single UPDATE and recover from a racing first insert.
    """
    __tablename__ = "counters"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)  # UTC calendar day
    count = Column(Integer, default=0, server_default="0", nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="counters")

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_counters_user_date"),
        CheckConstraint("count >= 0", name="ck_counters_count_non_negative"),
    )
