# File: app/api/v1/routes_auth.py

"""
Auth API routes.

Firebase does the actual sign-in on the device; these endpoints map the
Firebase account onto a local user and manage that user's profile.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from app.api.deps import (
    get_db,
    get_existing_user_id,
    get_identity_verifier,
    get_verified_identity,
)
from app.core.security import IdentityVerifier, VerifiedIdentity
from app.schemas.user import (
    MessageResponse,
    ProfileUpdate,
    RegisterRequest,
    UserRead,
    UserResponse,
    VerifyFirebaseRequest,
    VerifyFirebaseResponse,
)
from app.services import auth_service

router = APIRouter()


@router.post(
    "/firebase-register",
    response_model=UserResponse,
    summary="Register the Firebase user locally",
)
def firebase_register(
    request: Request,
    payload: Optional[RegisterRequest] = Body(None),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db),
):
    """
    Called by the app right after Firebase sign-up.

    Idempotent: a second call returns the existing user unchanged.
    """
    user, created = auth_service.get_or_create_user(
        db, identity, payload or RegisterRequest()
    )
    request.state.user_id = user.user_id
    message = "User registered successfully" if created else "User already exists"
    return UserResponse(message=message, user=UserRead.model_validate(user))


@router.post(
    "/verify-firebase",
    response_model=VerifyFirebaseResponse,
    summary="Verify a Firebase token sent in the body",
)
def verify_firebase(
    request: Request,
    payload: VerifyFirebaseRequest,
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    db: Session = Depends(get_db),
):
    identity = auth_service.authenticate(verifier, payload.firebase_token)
    user, _ = auth_service.get_or_create_user(db, identity)
    request.state.user_id = user.user_id
    return VerifyFirebaseResponse(
        token=payload.firebase_token,
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=UserResponse, summary="Current user profile")
def get_me(
    user_id: int = Depends(get_existing_user_id),
    db: Session = Depends(get_db),
):
    user = auth_service.require_existing_user(db, user_id)
    return UserResponse(user=UserRead.model_validate(user))


@router.put("/profile", response_model=UserResponse, summary="Overwrite profile fields")
def update_profile(
    payload: ProfileUpdate,
    user_id: int = Depends(get_existing_user_id),
    db: Session = Depends(get_db),
):
    user = auth_service.update_profile(db, user_id, payload)
    return UserResponse(
        message="Profile updated successfully",
        user=UserRead.model_validate(user),
    )


@router.delete("/account", response_model=MessageResponse, summary="Delete account and data")
def delete_account(
    user_id: int = Depends(get_existing_user_id),
    db: Session = Depends(get_db),
):
    auth_service.delete_account(db, user_id)
    return MessageResponse(message="Account deleted successfully")
