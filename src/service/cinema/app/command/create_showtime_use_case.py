from datetime import datetime
from decimal import Decimal
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.transaction_retry import run_with_transaction_retry
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    NotFoundError,
    ScheduleConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.command.reservation_guard import ensure_hall_slot_free
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.value_object.exclusivity_window import ExclusivityWindow


class CreateShowtimeUseCase:
    """
    Schedule a movie in a hall.

    Flow (one transaction, retried on lock timeouts):
    1. Lock the hall row
    2. Check hall and movie exist
    3. Scan the hall's showtimes inside the exclusivity window
    4. Insert and commit
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
    async def create_showtime(
        self, *, movie_id: int, hall_id: int, start_time: datetime, price: Decimal | float
    ) -> Showtime:
        with self.tracer.start_as_current_span(
            'use_case.create_showtime',
            attributes={'movie.id': movie_id, 'hall.id': hall_id},
        ):
            try:
                showtime = Showtime.create(
                    movie_id=movie_id, hall_id=hall_id, time=start_time, price=price
                )
                created = await run_with_transaction_retry(
                    lambda: self._create_atomically(showtime),
                    on_exhausted=ScheduleConflictError,
                    operation_name='create_showtime',
                )
            except ScheduleConflictError:
                metrics.record_schedule(operation='create', result='conflict')
                raise
            except CustomBaseError:
                metrics.record_schedule(operation='create', result='rejected')
                raise

            metrics.record_schedule(operation='create', result='created')
            Logger.base.info(
                f'🎬 [SCHEDULE] Showtime {created.id} created: movie={movie_id}, '
                f'hall={hall_id}, time={created.time.isoformat()}'
            )
            return created

    async def _create_atomically(self, showtime: Showtime) -> Showtime:
        async with self.uow:
            repo = self.uow.showtime_command_repo

            locked = await repo.lock_halls(hall_ids=[showtime.hall_id])
            if showtime.hall_id not in locked:
                raise NotFoundError('Hall not found')
            if not await repo.movie_exists(movie_id=showtime.movie_id):
                raise NotFoundError('Movie not found')

            await ensure_hall_slot_free(
                showtime_command_repo=repo,
                window=self.exclusivity_window,
                hall_id=showtime.hall_id,
                start_time=showtime.time,
            )

            created = await repo.create(showtime=showtime)
            await self.uow.commit()
            return created
