# File: tests/helpers.py

from datetime import datetime, timedelta

from sqlalchemy import func, select


def auth_headers(token: str = "token-a") -> dict:
    return {"Authorization": f"Bearer {token}"}


def session_payload(started_at: datetime, minutes: int = 15, **overrides) -> dict:
    payload = {
        "level": 5,
        "duration": minutes,
        "heatEnabled": False,
        "rotateEnabled": True,
        "caloriesBurned": 100,
        "notes": None,
        "startedAt": started_at.isoformat(),
        "endedAt": (started_at + timedelta(minutes=minutes)).isoformat(),
    }
    payload.update(overrides)
    return payload


def count_rows(database, model, **filters) -> int:
    with database.session() as db:
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        return db.execute(stmt).scalar_one()
