# File: app/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.core.errors import NotFound
from app.core.security import IdentityVerifier, VerifiedIdentity
from app.db.session import Database
from app.services import auth_service


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    with database.session() as db:
        yield db


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


def get_verified_identity(
    authorization: Optional[str] = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> VerifiedIdentity:
    """Token check only; no user row is looked up or created."""
    return auth_service.authenticate_header(verifier, authorization)


def get_current_user_id(
    request: Request,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db),
) -> int:
    """
    Resolve the caller to a local user, creating the row on first sight.

    The returned id is the only value handlers may use to scope queries.
    """
    user, _ = auth_service.get_or_create_user(db, identity)
    request.state.user_id = user.user_id
    return user.user_id


def get_existing_user_id(
    request: Request,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db),
) -> int:
    """Like get_current_user_id, but 404s instead of creating a user."""
    user = auth_service.find_user_by_subject(db, identity.subject_id)
    if user is None:
        raise NotFound("User not found")
    request.state.user_id = user.user_id
    return user.user_id
