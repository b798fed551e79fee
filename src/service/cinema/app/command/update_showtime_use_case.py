from datetime import datetime
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.transaction_retry import run_with_transaction_retry
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    DomainError,
    NotFoundError,
    ScheduleConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.command.reservation_guard import ensure_hall_slot_free
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.value_object.exclusivity_window import ExclusivityWindow


class UpdateShowtimeUseCase:
    """
    Partial update of a showtime.

    The exclusivity check runs against the effective values (new value or
    current one), excluding the showtime itself. Moving a showtime with
    CONFIRMED bookings to another hall is rejected: its seat ids would no
    longer match the hall.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, exclusivity_window: ExclusivityWindow) -> None:
        self.uow = uow
        self.exclusivity_window = exclusivity_window
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        exclusivity_window: ExclusivityWindow = Depends(Provide[Container.exclusivity_window]),
    ) -> Self:
        return cls(uow=uow, exclusivity_window=exclusivity_window)

    @Logger.io
    async def update_showtime(
        self,
        *,
        showtime_id: int,
        movie_id: Optional[int] = None,
        hall_id: Optional[int] = None,
        start_time: Optional[datetime] = None,
        price: Optional[Decimal | float] = None,
    ) -> Showtime:
        with self.tracer.start_as_current_span(
            'use_case.update_showtime', attributes={'showtime.id': showtime_id}
        ):
            changes = {
                'movie_id': movie_id,
                'hall_id': hall_id,
                'time': start_time,
                'price': price,
            }
            try:
                updated = await run_with_transaction_retry(
                    lambda: self._update_atomically(showtime_id=showtime_id, changes=changes),
                    on_exhausted=ScheduleConflictError,
                    operation_name='update_showtime',
                )
            except ScheduleConflictError:
                metrics.record_schedule(operation='update', result='conflict')
                raise
            except CustomBaseError:
                metrics.record_schedule(operation='update', result='rejected')
                raise

            metrics.record_schedule(operation='update', result='updated')
            return updated

    async def _update_atomically(self, *, showtime_id: int, changes: dict) -> Showtime:
        async with self.uow:
            repo = self.uow.showtime_command_repo

            snapshot = await repo.get_by_id(showtime_id=showtime_id)
            if snapshot is None:
                raise NotFoundError('Showtime not found')
            target_hall_id = changes['hall_id'] or snapshot.hall_id

            # Hall locks first, then the showtime row
            hall_ids = {snapshot.hall_id, target_hall_id}
            locked_halls = await repo.lock_halls(hall_ids=sorted(hall_ids))
            if target_hall_id not in locked_halls:
                raise NotFoundError('Hall not found')

            current = await repo.get_by_id(showtime_id=showtime_id, for_update=True)
            if current is None:
                raise NotFoundError('Showtime not found')
            if current.hall_id not in locked_halls:
                # Moved by a concurrent update between the snapshot and the lock
                await repo.lock_halls(hall_ids=[current.hall_id])

            updated = current.apply_changes(**changes)

            if updated.movie_id != current.movie_id and not await repo.movie_exists(
                movie_id=updated.movie_id
            ):
                raise NotFoundError('Movie not found')

            if updated.moves_hall(current):
                if await repo.count_bookings(showtime_id=showtime_id):
                    raise DomainError('Cannot move a showtime with bookings to another hall')

            if updated.reschedules(current):
                await ensure_hall_slot_free(
                    showtime_command_repo=repo,
                    window=self.exclusivity_window,
                    hall_id=updated.hall_id,
                    start_time=updated.time,
                    exclude_showtime_id=showtime_id,
                )

            saved = await repo.update(showtime=updated)
            await self.uow.commit()
            return saved
