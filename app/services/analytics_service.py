# File: app/services/analytics_service.py

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.preference import PREFERENCE_DEFAULTS
from app.models.session import MassageSession
from app.schemas.analytics import AnalyticsSummary


def most_used_level(db: Session, user_id: int) -> int | None:
    # Most frequent level, lowest level wins a tie
    uses = func.count(MassageSession.session_id)
    stmt = (
        select(MassageSession.level)
        .where(MassageSession.user_id == user_id)
        .group_by(MassageSession.level)
        .order_by(uses.desc(), MassageSession.level.asc())
        .limit(1)
    )
    return db.execute(stmt).scalar_one_or_none()


def summary(db: Session, user_id: int) -> AnalyticsSummary:
    """All-time totals for the user's sessions."""
    total, minutes, calories = db.execute(
        select(
            func.count(MassageSession.session_id),
            func.sum(MassageSession.duration),
            func.sum(MassageSession.calories_burned),
        ).where(MassageSession.user_id == user_id)
    ).one()

    level = most_used_level(db, user_id)
    return AnalyticsSummary(
        total_sessions=total or 0,
        most_used_level=level if level is not None else PREFERENCE_DEFAULTS["favorite_level"],
        total_minutes=int(minutes or 0),
        total_calories=int(calories or 0),
    )
