# File: app/services/session_service.py

"""
Massage session logging and per-user statistics.

All queries are filtered on the caller's resolved ``user_id``.
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from app.db.session import commit
from app.models.session import MassageSession
from app.schemas.session import SessionCreate, SessionStatistics

DEFAULT_PAGE_SIZE = 50
DEFAULT_STATS_DAYS = 30


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_session(db: Session, user_id: int, payload: SessionCreate) -> MassageSession:
    row = MassageSession(
        user_id=user_id,
        level=payload.level,
        duration=payload.duration,
        heat_enabled=payload.heat_enabled,
        rotate_enabled=payload.rotate_enabled,
        calories_burned=payload.calories_burned,
        notes=payload.notes,
        started_at=payload.started_at,
        ended_at=payload.ended_at,
    )
    db.add(row)
    commit(db)
    db.refresh(row)
    return row


def list_sessions(
    db: Session,
    user_id: int,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> list[MassageSession]:
    stmt = (
        select(MassageSession)
        .where(MassageSession.user_id == user_id)
        .order_by(MassageSession.started_at.desc(), MassageSession.session_id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(stmt).scalars())


def session_statistics(
    db: Session,
    user_id: int,
    days: int = DEFAULT_STATS_DAYS,
) -> SessionStatistics:
    """
    Totals over sessions started within the last ``days`` days.
    """
    since = utcnow() - timedelta(days=days)
    stmt = select(
        func.count(MassageSession.session_id),
        func.sum(MassageSession.duration),
        func.sum(MassageSession.calories_burned),
        func.avg(MassageSession.level),
        func.sum(case((MassageSession.heat_enabled, 1), else_=0)),
    ).where(
        MassageSession.user_id == user_id,
        MassageSession.started_at >= since,
    )
    total, minutes, calories, avg_level, heat_count = db.execute(stmt).one()

    total = total or 0
    heat_usage = int((heat_count or 0) / total * 100) if total else 0
    return SessionStatistics(
        total_sessions=total,
        total_minutes=int(minutes or 0),
        total_calories=int(calories or 0),
        avg_level=float(avg_level or 0),
        heat_usage_percent=heat_usage,
        date_range=days,
    )
