# File: tests/conftest.py

"""
Shared fixtures: an in-memory SQLite database and a fake identity provider.

To run:
    pytest -q
"""

import os

# Keep the module-level app in app.main off Postgres/Firebase
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import VerificationError, VerifiedIdentity
from app.db.session import Database
from app.main import create_application


class FakeIdentityVerifier:
    """Maps token strings to identities; anything else fails verification."""

    def __init__(self):
        self.tokens: dict[str, VerifiedIdentity] = {}
        self.calls: list[str] = []

    def add(self, token: str, subject_id: str, email: str) -> str:
        self.tokens[token] = VerifiedIdentity(subject_id=subject_id, email=email)
        return token

    def verify(self, token: str) -> VerifiedIdentity:
        self.calls.append(token)
        try:
            return self.tokens[token]
        except KeyError:
            raise VerificationError("unknown token") from None


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    with database.session() as session:
        yield session


@pytest.fixture
def verifier():
    fake = FakeIdentityVerifier()
    fake.add("token-a", "uid_1", "a@x.com")
    fake.add("token-b", "uid_2", "b@x.com")
    return fake


@pytest.fixture
def app(database, verifier):
    settings = Settings(database_url="sqlite://", auto_create_tables=True)
    return create_application(
        settings=settings, database=database, identity_verifier=verifier
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
