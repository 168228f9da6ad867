# File: app/schemas/session.py

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


def to_naive_utc(value: datetime) -> datetime:
    """Sessions are stored as naive UTC timestamps."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class SessionBase(BaseModel):
    level: int
    duration: int
    heat_enabled: bool = False
    rotate_enabled: bool = False
    calories_burned: int = 0
    notes: Optional[str] = None
    started_at: datetime
    ended_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SessionCreate(SessionBase):
    # Range and ordering rules are enforced by the table constraints
    @field_validator("started_at", "ended_at")
    @classmethod
    def normalize_timestamps(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class SessionRead(SessionBase):
    session_id: int = Field(..., serialization_alias="session_id")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class SessionResponse(BaseModel):
    success: bool = True
    message: str = "Session saved successfully"
    session: SessionRead


class SessionListResponse(BaseModel):
    success: bool = True
    count: int
    sessions: list[SessionRead]


class SessionStatistics(BaseModel):
    total_sessions: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    avg_level: float = 0.0
    heat_usage_percent: int = 0
    date_range: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SessionStatisticsResponse(BaseModel):
    success: bool = True
    statistics: SessionStatistics
