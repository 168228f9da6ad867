"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata.
"""

from sqlalchemy.engine import Engine

from app.models.base import Base
from app.models import preference, session, user  # noqa: F401


def init_db(engine: Engine) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)
