# File: app/services/preference_service.py

"""
Per-user preferences.

Reading preferences is an upsert: a user without a row gets one with
``PREFERENCE_DEFAULTS`` written on the spot.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import translate_store_error
from app.db.session import commit
from app.models.preference import PREFERENCE_DEFAULTS, Preference
from app.schemas.preference import PreferenceUpdate

logger = logging.getLogger(__name__)


def find_preferences(db: Session, user_id: int) -> Preference | None:
    return db.execute(
        select(Preference).where(Preference.user_id == user_id)
    ).scalar_one_or_none()


def get_or_create_preferences(db: Session, user_id: int) -> Preference:
    """
    Return the user's preferences, creating the default row if missing.

    Side effect: writes a row on first call for a user.
    """
    prefs = find_preferences(db, user_id)
    if prefs is not None:
        return prefs

    prefs = Preference(user_id=user_id, **PREFERENCE_DEFAULTS)
    db.add(prefs)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        existing = find_preferences(db, user_id)
        if existing is None:
            raise translate_store_error(exc) from exc
        return existing

    db.refresh(prefs)
    logger.info("Created default preferences for user %s", user_id)
    return prefs


def update_preferences(
    db: Session, user_id: int, payload: PreferenceUpdate
) -> Preference:
    """
    Apply a sparse update. Columns not present in ``payload`` keep their
    current values.
    """
    prefs = get_or_create_preferences(db, user_id)
    changes = payload.changes()
    if changes:
        try:
            db.execute(
                update(Preference)
                .where(Preference.user_id == user_id)
                .values(**changes)
            )
        except SQLAlchemyError as exc:
            db.rollback()
            raise translate_store_error(exc) from exc
        commit(db)
    db.refresh(prefs)
    return prefs
