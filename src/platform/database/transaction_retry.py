"""
Bounded retry for transactions that lose a lock race.

Only transient concurrency failures are retried: serialization failures,
deadlocks, lock timeouts and SQLite's "database is locked". Everything else
(including domain errors) propagates on the first attempt.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics


_T = TypeVar('_T')

# serialization_failure, deadlock_detected, lock_not_available, query_canceled (statement_timeout)
RETRYABLE_SQLSTATES = frozenset({'40001', '40P01', '55P03', '57014'})
_RETRYABLE_MESSAGES = (
    'database is locked',
    'database table is locked',
    'deadlock detected',
    'could not serialize access',
    'lock timeout',
    'canceling statement due to',
)


def _sqlstate_of(exc: DBAPIError) -> str | None:
    orig = getattr(exc, 'orig', None)
    for candidate in (orig, getattr(orig, '__cause__', None)):
        code = getattr(candidate, 'sqlstate', None) or getattr(candidate, 'pgcode', None)
        if code:
            return str(code)
    return None


def is_retryable_transaction_error(exc: BaseException) -> bool:
    if not isinstance(exc, DBAPIError):
        return False
    if _sqlstate_of(exc) in RETRYABLE_SQLSTATES:
        return True
    message = str(exc).lower()
    return any(fragment in message for fragment in _RETRYABLE_MESSAGES)


async def run_with_transaction_retry(
    operation: Callable[[], Awaitable[_T]],
    *,
    on_exhausted: Callable[[], Exception],
    operation_name: str,
    max_attempts: int | None = None,
    base_delay: float | None = None,
) -> _T:
    """
    Run `operation` (which must open its own transaction) up to `max_attempts` times.

    When every attempt fails with a transient lock error, the exception built by
    `on_exhausted` is raised from the last database error.
    """
    attempts = max_attempts or settings.TRANSACTION_RETRY_ATTEMPTS
    delay = settings.TRANSACTION_RETRY_BASE_DELAY if base_delay is None else base_delay

    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except DBAPIError as e:
            if not is_retryable_transaction_error(e):
                raise
            if attempt >= attempts:
                Logger.base.warning(
                    f'⛔ [TX-RETRY] {operation_name}: giving up after {attempt} attempts: {e.orig}'
                )
                raise on_exhausted() from e
            Logger.base.info(
                f'🔁 [TX-RETRY] {operation_name}: {attempt}/{attempts} lost lock race, retry in {delay}s'
            )
            metrics.record_transaction_retry(operation=operation_name)
            await asyncio.sleep(delay)
            delay *= 2

    raise on_exhausted()
