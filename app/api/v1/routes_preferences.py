# File: app/api/v1/routes_preferences.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db
from app.schemas.preference import PreferenceRead, PreferenceResponse, PreferenceUpdate
from app.services import preference_service

router = APIRouter()


@router.get("", response_model=PreferenceResponse, summary="Get preferences")
def get_preferences(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Not a pure read: the default preferences row is created on first call.
    """
    prefs = preference_service.get_or_create_preferences(db, user_id)
    return PreferenceResponse(preferences=PreferenceRead.model_validate(prefs))


@router.put("", response_model=PreferenceResponse, summary="Update some preferences")
def update_preferences(
    payload: PreferenceUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    prefs = preference_service.update_preferences(db, user_id, payload)
    return PreferenceResponse(
        message="Preferences updated successfully",
        preferences=PreferenceRead.model_validate(prefs),
    )
