# File: app/api/v1/routes_analytics.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db
from app.schemas.analytics import AnalyticsSummaryResponse
from app.services import analytics_service

router = APIRouter()


@router.get("/summary", response_model=AnalyticsSummaryResponse)
def get_summary(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return AnalyticsSummaryResponse(summary=analytics_service.summary(db, user_id))
