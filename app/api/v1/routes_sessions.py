# File: app/api/v1/routes_sessions.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db
from app.schemas.session import (
    SessionCreate,
    SessionListResponse,
    SessionRead,
    SessionResponse,
    SessionStatisticsResponse,
)
from app.services import session_service

router = APIRouter()


@router.post("", response_model=SessionResponse, summary="Save a massage session")
def create_session(
    payload: SessionCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = session_service.create_session(db, user_id, payload)
    return SessionResponse(session=SessionRead.model_validate(row))


@router.get("", response_model=SessionListResponse, summary="List massage sessions")
def list_sessions(
    limit: int = Query(session_service.DEFAULT_PAGE_SIZE, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Newest first (by start time).
    """
    rows = session_service.list_sessions(db, user_id, limit=limit, offset=offset)
    return SessionListResponse(
        count=len(rows),
        sessions=[SessionRead.model_validate(r) for r in rows],
    )


@router.get(
    "/statistics",
    response_model=SessionStatisticsResponse,
    summary="Session statistics for the last N days",
)
def session_statistics(
    days: int = Query(session_service.DEFAULT_STATS_DAYS, ge=1, le=3650),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    stats = session_service.session_statistics(db, user_id, days=days)
    return SessionStatisticsResponse(statistics=stats)
