from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.platform.database.transaction_retry import (
    is_retryable_transaction_error,
    run_with_transaction_retry,
)
from src.platform.exception.exceptions import NotFoundError, ScheduleConflictError


pytestmark = pytest.mark.unit


class _PgError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__(f'sqlstate {sqlstate}')
        self.sqlstate = sqlstate


def _locked() -> OperationalError:
    return OperationalError('UPDATE showtime', {}, Exception('database is locked'))


class TestIsRetryable:
    @pytest.mark.parametrize('sqlstate', ['40001', '40P01', '55P03', '57014'])
    def test_postgres_lock_failures(self, sqlstate):
        assert is_retryable_transaction_error(OperationalError('SELECT', {}, _PgError(sqlstate)))

    def test_sqlite_busy(self):
        assert is_retryable_transaction_error(_locked())

    def test_constraint_violation_is_not_retried(self):
        error = IntegrityError('INSERT', {}, _PgError('23505'))

        assert not is_retryable_transaction_error(error)

    def test_non_database_errors(self):
        assert not is_retryable_transaction_error(ValueError('boom'))


class TestRunWithTransactionRetry:
    async def test_first_success_runs_once(self):
        operation = AsyncMock(return_value='ok')

        result = await run_with_transaction_retry(
            operation, on_exhausted=ScheduleConflictError, operation_name='op', base_delay=0
        )

        assert result == 'ok'
        assert operation.await_count == 1

    async def test_retries_until_success(self):
        operation = AsyncMock(side_effect=[_locked(), _locked(), 'ok'])

        result = await run_with_transaction_retry(
            operation,
            on_exhausted=ScheduleConflictError,
            operation_name='op',
            max_attempts=3,
            base_delay=0,
        )

        assert result == 'ok'
        assert operation.await_count == 3

    async def test_exhaustion_raises_domain_error(self):
        operation = AsyncMock(side_effect=_locked())

        with pytest.raises(ScheduleConflictError) as exc_info:
            await run_with_transaction_retry(
                operation,
                on_exhausted=ScheduleConflictError,
                operation_name='op',
                max_attempts=2,
                base_delay=0,
            )

        assert operation.await_count == 2
        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_domain_errors_are_not_retried(self):
        operation = AsyncMock(side_effect=NotFoundError('Showtime not found'))

        with pytest.raises(NotFoundError):
            await run_with_transaction_retry(
                operation, on_exhausted=ScheduleConflictError, operation_name='op', base_delay=0
            )

        assert operation.await_count == 1

    async def test_non_transient_database_errors_propagate(self):
        operation = AsyncMock(side_effect=IntegrityError('INSERT', {}, _PgError('23505')))

        with pytest.raises(IntegrityError):
            await run_with_transaction_retry(
                operation, on_exhausted=ScheduleConflictError, operation_name='op', base_delay=0
            )

        assert operation.await_count == 1
