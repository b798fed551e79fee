from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.transaction_retry import run_with_transaction_retry
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, ScheduleConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics


class DeleteShowtimeUseCase:
    """Delete a showtime together with all of its bookings (any status)."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete_showtime(self, *, showtime_id: int) -> int:
        with self.tracer.start_as_current_span(
            'use_case.delete_showtime', attributes={'showtime.id': showtime_id}
        ):
            removed_bookings = await run_with_transaction_retry(
                lambda: self._delete_atomically(showtime_id=showtime_id),
                on_exhausted=ScheduleConflictError,
                operation_name='delete_showtime',
            )
            metrics.record_schedule(operation='delete', result='deleted')
            Logger.base.info(
                f'🗑️ [SCHEDULE] Showtime {showtime_id} deleted with {removed_bookings} bookings'
            )
            return removed_bookings

    async def _delete_atomically(self, *, showtime_id: int) -> int:
        async with self.uow:
            repo = self.uow.showtime_command_repo

            # Same row lock as booking writers: no booking can slip in mid-delete
            if await repo.get_by_id(showtime_id=showtime_id, for_update=True) is None:
                raise NotFoundError('Showtime not found')

            removed = await repo.delete_with_bookings(showtime_id=showtime_id)
            await self.uow.commit()
            return removed
