# File: app/models/preference.py

"""
Preference model: at most one settings row per user.
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base

THEMES = ("light", "dark", "auto")
LANGUAGES = ("vi", "en", "zh", "ja", "ko")

# Values written when a user's preferences are first read
PREFERENCE_DEFAULTS = {
    "favorite_level": 3,
    "default_duration": 15,
    "enable_heat_by_default": False,
    "enable_notifications": True,
    "notification_time": "20:00",
    "theme": "light",
    "language": "vi",
}


def _in_list(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class Preference(Base):
    __tablename__ = "preferences"
    __table_args__ = (
        CheckConstraint(
            "favorite_level >= 1 AND favorite_level <= 10", name="ck_preferences_level"
        ),
        CheckConstraint("default_duration > 0", name="ck_preferences_duration"),
        CheckConstraint(_in_list("theme", THEMES), name="ck_preferences_theme"),
        CheckConstraint(_in_list("language", LANGUAGES), name="ck_preferences_language"),
    )

    preference_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )

    favorite_level: Mapped[int] = mapped_column(
        Integer, nullable=False, default=PREFERENCE_DEFAULTS["favorite_level"]
    )
    default_duration: Mapped[int] = mapped_column(
        Integer, nullable=False, default=PREFERENCE_DEFAULTS["default_duration"]
    )
    enable_heat_by_default: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=PREFERENCE_DEFAULTS["enable_heat_by_default"]
    )
    enable_notifications: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=PREFERENCE_DEFAULTS["enable_notifications"]
    )
    # "HH:MM"
    notification_time: Mapped[str] = mapped_column(
        String(5), nullable=False, default=PREFERENCE_DEFAULTS["notification_time"]
    )
    theme: Mapped[str] = mapped_column(
        String(10), nullable=False, default=PREFERENCE_DEFAULTS["theme"]
    )
    language: Mapped[str] = mapped_column(
        String(5), nullable=False, default=PREFERENCE_DEFAULTS["language"]
    )

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
