# File: app/services/auth_service.py

"""
Identity resolution and account management.

Every protected request goes through here:
  - the bearer token is checked with the identity provider,
  - the verified subject is mapped to a local ``users`` row (created on
    first sight),
  - the resulting ``user_id`` is the only key handlers use to scope
    their queries.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFound, Unauthenticated, translate_store_error
from app.core.security import (
    IdentityVerifier,
    VerificationError,
    VerifiedIdentity,
    extract_bearer_token,
)
from app.db.session import commit
from app.models.preference import Preference
from app.models.session import MassageSession
from app.models.user import User
from app.schemas.user import ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)


def authenticate(verifier: IdentityVerifier, token: str) -> VerifiedIdentity:
    """
    Verify a raw token. Every failure cause collapses into the same
    Unauthenticated(InvalidToken) so callers can't probe why a token failed.
    """
    try:
        return verifier.verify(token)
    except VerificationError as exc:
        logger.info("Token verification failed: %s", exc)
        raise Unauthenticated(Unauthenticated.INVALID_TOKEN) from exc


def authenticate_header(
    verifier: IdentityVerifier, authorization: Optional[str]
) -> VerifiedIdentity:
    return authenticate(verifier, extract_bearer_token(authorization))


def resolve_identity(
    db: Session, verifier: IdentityVerifier, authorization: Optional[str]
) -> User:
    identity = authenticate_header(verifier, authorization)
    user, _ = get_or_create_user(db, identity)
    return user


def find_user_by_subject(db: Session, subject_id: str) -> Optional[User]:
    return db.execute(
        select(User).where(User.firebase_uid == subject_id)
    ).scalar_one_or_none()


def default_display_name(email: str) -> str:
    return email.split("@", 1)[0]


def get_or_create_user(
    db: Session,
    identity: VerifiedIdentity,
    profile: Optional[RegisterRequest] = None,
) -> tuple[User, bool]:
    """
    Return ``(user, created)`` for a verified identity.

    An existing row is returned untouched. Two first logins racing on the
    same subject both try to insert; the loser hits the unique constraint
    on ``firebase_uid`` and reads back the winner's row.
    """
    user = find_user_by_subject(db, identity.subject_id)
    if user is not None:
        return user, False

    user = User(firebase_uid=identity.subject_id, email=identity.email)
    if profile is not None:
        user.name = profile.name
        user.age = profile.age
        user.weight = profile.weight
        user.height = profile.height
        user.gender = profile.gender
    if not user.name:
        user.name = default_display_name(identity.email)

    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        existing = find_user_by_subject(db, identity.subject_id)
        if existing is None:
            # Not a race: a CHECK failure or an email bound to another subject
            raise translate_store_error(exc) from exc
        logger.info("User %s was created concurrently, reusing it", existing.user_id)
        return existing, False

    db.refresh(user)
    logger.info("Created user %s", user.user_id)
    return user, True


def require_existing_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def update_profile(db: Session, user_id: int, payload: ProfileUpdate) -> User:
    user = require_existing_user(db, user_id)
    user.name = payload.name
    user.age = payload.age
    user.weight = payload.weight
    user.height = payload.height
    commit(db)
    db.refresh(user)
    return user


def delete_account(db: Session, user_id: int) -> None:
    """
    Remove the user's sessions, preference and user row in one transaction.
    """
    try:
        db.execute(delete(MassageSession).where(MassageSession.user_id == user_id))
        db.execute(delete(Preference).where(Preference.user_id == user_id))
        result = db.execute(delete(User).where(User.user_id == user_id))
        if result.rowcount == 0:
            db.rollback()
            raise NotFound("User not found")
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_store_error(exc) from exc
    logger.info("Deleted account for user %s", user_id)
