# File: app/core/security.py

"""
Identity verification for the massage device API.

Tokens are Firebase Authentication ID tokens issued to the mobile app.
The rest of the code only sees the narrow ``IdentityVerifier`` interface,
so tests can swap in a fake without touching Firebase.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from app.core.config import Settings
from app.core.errors import Unauthenticated

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

FIREBASE_APP_NAME = "massage-api"


@dataclass(frozen=True)
class VerifiedIdentity:
    subject_id: str
    email: str


class VerificationError(Exception):
    """Token could not be verified (expired, malformed, revoked, provider down...)."""


class IdentityVerifier(Protocol):
    def verify(self, token: str) -> VerifiedIdentity:
        ...


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Return the token part of an ``Authorization: Bearer <token>`` header.

    Raises Unauthenticated(MissingToken) when the header is absent, uses a
    different scheme, or carries an empty token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthenticated(Unauthenticated.MISSING_TOKEN)
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthenticated(Unauthenticated.MISSING_TOKEN)
    return token


class FirebaseIdentityVerifier:
    """
    Verifies Firebase ID tokens with the Admin SDK.

    Credentials come from FIREBASE_SERVICE_ACCOUNT (inline JSON) or
    FIREBASE_CREDENTIALS_FILE. Without either, the verifier stays
    unconfigured and rejects every token.
    """

    def __init__(
        self,
        *,
        service_account: Optional[str] = None,
        credentials_file: Optional[str] = None,
        check_revoked: bool = False,
    ):
        self.check_revoked = check_revoked
        self._app: Optional[firebase_admin.App] = None

        if service_account:
            cred = credentials.Certificate(json.loads(service_account))
        elif credentials_file:
            cred = credentials.Certificate(credentials_file)
        else:
            logger.warning("Firebase Admin not initialized: no credentials configured")
            return

        try:
            self._app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            self._app = firebase_admin.initialize_app(cred, name=FIREBASE_APP_NAME)
        logger.info("Firebase Admin initialized")

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirebaseIdentityVerifier":
        return cls(
            service_account=settings.firebase_service_account,
            credentials_file=settings.firebase_credentials_file,
            check_revoked=settings.firebase_check_revoked,
        )

    @property
    def configured(self) -> bool:
        return self._app is not None

    def verify(self, token: str) -> VerifiedIdentity:
        if self._app is None:
            raise VerificationError("identity provider not configured")

        try:
            decoded = auth.verify_id_token(
                token, app=self._app, check_revoked=self.check_revoked
            )
        except (ValueError, FirebaseError) as exc:
            # Covers invalid/expired/revoked tokens and certificate fetch failures
            raise VerificationError(type(exc).__name__) from exc

        subject_id = decoded.get("uid") or decoded.get("sub")
        email = decoded.get("email")
        if not subject_id:
            raise VerificationError("token has no subject")
        if not email:
            raise VerificationError("token has no email claim")
        return VerifiedIdentity(subject_id=subject_id, email=email)
