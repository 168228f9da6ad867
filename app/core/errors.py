# File: app/core/errors.py

"""
Error taxonomy for the API.

Services raise these; the exception handlers installed in ``app.main``
turn them into ``{"error": "<message>"}`` envelopes with the matching
HTTP status.
"""

import logging

from fastapi import status
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthenticated(AppError):
    """Missing or invalid bearer token."""

    MISSING_TOKEN = "MissingToken"
    INVALID_TOKEN = "InvalidToken"

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, reason: str):
        self.reason = reason
        if reason == self.MISSING_TOKEN:
            super().__init__("No token provided")
        else:
            super().__init__("Invalid token")


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"


class StoreUnavailable(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Database unavailable"


def translate_store_error(exc: SQLAlchemyError) -> AppError:
    """
    Map a SQLAlchemy failure onto the API error taxonomy.

    Driver text (row values, constraint names) goes to the log only.
    """
    if isinstance(exc, (IntegrityError, DataError)):
        logger.warning("Rejected by store constraint: %s", getattr(exc, "orig", None) or exc)
        return ValidationFailed("Invalid value")
    logger.error("Store failure: %s", exc)
    return StoreUnavailable()
