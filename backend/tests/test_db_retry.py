"""Tests for transient database error retries."""

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from workorders.utils.db_retry import DbRetryConfig, get_db_retrying, is_transient_db_error

NO_WAIT = DbRetryConfig(max_attempts=3, min_wait=0, max_wait=0, multiplier=0)


def test_transient_errors() -> None:
    assert is_transient_db_error(OperationalError("SELECT 1", {}, Exception("deadlock detected")))
    assert is_transient_db_error(DBAPIError("SELECT 1", {}, Exception("gone"), connection_invalidated=True))
    assert not is_transient_db_error(IntegrityError("INSERT", {}, Exception("duplicate key")))
    assert not is_transient_db_error(ValueError("nope"))


async def test_retries_transient_error_then_succeeds() -> None:
    calls = 0

    async for attempt in get_db_retrying(NO_WAIT):
        with attempt:
            calls += 1
            if calls < 3:
                raise OperationalError("UPDATE", {}, Exception("lock timeout"))

    assert calls == 3


async def test_gives_up_after_max_attempts() -> None:
    calls = 0

    with pytest.raises(OperationalError):
        async for attempt in get_db_retrying(NO_WAIT):
            with attempt:
                calls += 1
                raise OperationalError("UPDATE", {}, Exception("lock timeout"))

    assert calls == 3


async def test_does_not_retry_other_errors() -> None:
    calls = 0

    with pytest.raises(IntegrityError):
        async for attempt in get_db_retrying(NO_WAIT):
            with attempt:
                calls += 1
                raise IntegrityError("INSERT", {}, Exception("duplicate key"))

    assert calls == 1
