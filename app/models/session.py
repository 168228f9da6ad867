# File: app/models/session.py

"""
MassageSession model: one completed use of the massage device.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base

MIN_LEVEL = 1
MAX_LEVEL = 10


class MassageSession(Base):
    __tablename__ = "massage_sessions"
    __table_args__ = (
        CheckConstraint(
            f"level >= {MIN_LEVEL} AND level <= {MAX_LEVEL}", name="ck_sessions_level"
        ),
        CheckConstraint("duration > 0", name="ck_sessions_duration"),
        CheckConstraint("calories_burned >= 0", name="ck_sessions_calories"),
        CheckConstraint("ended_at > started_at", name="valid_session_time"),
        Index("idx_sessions_user_started", "user_id", "started_at"),
    )

    session_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    level: Mapped[int] = mapped_column(Integer, nullable=False)
    # Minutes
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    heat_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rotate_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    calories_burned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Naive UTC
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    ended_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
    )
