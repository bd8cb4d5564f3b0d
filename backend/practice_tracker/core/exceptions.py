"""
Error taxonomy surfaced to API callers.

Services raise these; handlers in main.py render them as {"error": message}.
Storage exceptions never leave the service layer untranslated (see
translate_db_errors).
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

logger = logging.getLogger(__name__)


class PracticeTrackerError(Exception):
    """Base exception for all practice tracker errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(PracticeTrackerError):
    """Missing, invalid or unverifiable credential, or bad login."""

    status_code = 401
    default_message = "Unauthorized"


class NotFound(PracticeTrackerError):
    """Unknown resource, or one owned by another user."""

    status_code = 404
    default_message = "Not found"


class Conflict(PracticeTrackerError):
    """Duplicate username or duplicate same-day completion."""

    status_code = 409
    default_message = "Resource already exists"


class Internal(PracticeTrackerError):
    """Storage or cryptographic failure. The message never carries details."""

    status_code = 500
    default_message = "Internal server error"


def _is_unique_violation(exc: IntegrityError) -> bool:
    # asyncpg exposes sqlstate 23505; sqlite only reports it in the message text
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == "23505"
    return "UNIQUE constraint failed" in str(orig)


def translate_db_error(exc: SQLAlchemyError) -> PracticeTrackerError:
    """Map a storage exception onto the error taxonomy, logging the detail."""
    if isinstance(exc, NoResultFound):
        logger.error("Database error: row not found")
        return NotFound()
    if isinstance(exc, IntegrityError):
        logger.error("Database error: %s", exc.orig)
        if _is_unique_violation(exc):
            return Conflict()
        return Internal()
    logger.error("Unexpected database error: %s", exc, exc_info=exc)
    return Internal()


@asynccontextmanager
async def translate_db_errors() -> AsyncIterator[None]:
    """Re-raise any SQLAlchemyError from the block as a PracticeTrackerError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise translate_db_error(e) from e
