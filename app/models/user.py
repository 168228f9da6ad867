# File: app/models/user.py

"""
User model.

One row per Firebase account. ``firebase_uid`` is the external subject
identifier and is never reassigned; ``user_id`` is the key every other
table hangs off.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("age >= 0 AND age <= 150", name="ck_users_age"),
        CheckConstraint("weight >= 0", name="ck_users_weight"),
        CheckConstraint("height >= 0", name="ck_users_height"),
        CheckConstraint(
            "gender IN ('male', 'female', 'other')", name="ck_users_gender"
        ),
    )

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    firebase_uid: Mapped[str] = mapped_column(
        String(128), unique=True, index=True, nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    # Profile fields, all optional
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    height: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
