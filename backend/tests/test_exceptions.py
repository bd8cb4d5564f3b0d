"""Tests for translating storage errors into the API error taxonomy."""

import pytest
from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError

from practice_tracker.core.exceptions import (
    Conflict,
    Internal,
    NotFound,
    translate_db_error,
    translate_db_errors,
)


class _PgUniqueViolation(Exception):
    sqlstate = "23505"


class _PgForeignKeyViolation(Exception):
    sqlstate = "23503"


def test_unique_violation_becomes_conflict():
    exc = IntegrityError("INSERT ...", {}, _PgUniqueViolation("duplicate key"))
    assert isinstance(translate_db_error(exc), Conflict)


def test_sqlite_unique_violation_becomes_conflict():
    exc = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed: users.username"))
    assert isinstance(translate_db_error(exc), Conflict)


def test_other_integrity_error_is_internal():
    exc = IntegrityError("INSERT ...", {}, _PgForeignKeyViolation("fk"))
    err = translate_db_error(exc)
    assert isinstance(err, Internal)
    assert err.message == "Internal server error"


def test_no_result_becomes_not_found():
    assert isinstance(translate_db_error(NoResultFound()), NotFound)


def test_unexpected_error_hides_details(caplog):
    exc = OperationalError("SELECT 1", {}, Exception("password authentication failed for user postgres"))
    err = translate_db_error(exc)
    assert isinstance(err, Internal)
    assert "password" not in err.message
    assert "password authentication failed" in caplog.text


@pytest.mark.asyncio
async def test_context_manager_translates():
    with pytest.raises(Conflict) as info:
        async with translate_db_errors():
            raise IntegrityError("INSERT ...", {}, _PgUniqueViolation("duplicate key"))
    assert isinstance(info.value.__cause__, IntegrityError)


@pytest.mark.asyncio
async def test_context_manager_passes_domain_errors_through():
    with pytest.raises(NotFound):
        async with translate_db_errors():
            raise NotFound("Action not found")
