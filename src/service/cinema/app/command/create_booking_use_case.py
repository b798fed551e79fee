import time
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.transaction_retry import run_with_transaction_retry
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    NotFoundError,
    SeatsUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.command.reservation_guard import ensure_seats_bookable
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.value_object.seat_selection import SeatSelection


class CreateBookingUseCase:
    """
    Reserve seats of a showtime for the calling user.

    Flow (one transaction, retried on lock timeouts and serialization failures):
    1. Lock the showtime row
    2. Check every seat belongs to the showtime's hall
    3. Read CONFIRMED occupancy and reject any overlap
    4. Insert the booking at the showtime's current price and commit

    Two concurrent requests for intersecting seats are serialized on step 1,
    so at most one of them commits.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_booking(self, *, user_id: int, showtime_id: int, seat_ids: List[int]) -> Booking:
        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'user.id': user_id,
                'showtime.id': showtime_id,
                'seat.count': len(seat_ids),
            },
        ):
            try:
                seats = SeatSelection.of(seat_ids)
                booking = await run_with_transaction_retry(
                    lambda: self._create_atomically(
                        user_id=user_id, showtime_id=showtime_id, seats=seats
                    ),
                    on_exhausted=SeatsUnavailableError,
                    operation_name='create_booking',
                )
            except SeatsUnavailableError:
                metrics.record_booking(
                    operation='create', result='conflict', duration=time.perf_counter() - start
                )
                raise
            except CustomBaseError:
                metrics.record_booking(
                    operation='create', result='rejected', duration=time.perf_counter() - start
                )
                raise

            metrics.record_booking(
                operation='create', result='created', duration=time.perf_counter() - start
            )
            metrics.record_booked_seats(count=len(booking.seat_ids))
            Logger.base.info(
                f'🎟️ [BOOKING] Booking {booking.id} confirmed: user={user_id}, '
                f'showtime={showtime_id}, seats={booking.seat_ids}, total={booking.total_price}'
            )
            return booking

    async def _create_atomically(
        self, *, user_id: int, showtime_id: int, seats: SeatSelection
    ) -> Booking:
        async with self.uow:
            repo = self.uow.booking_command_repo

            showtime = await repo.lock_showtime(showtime_id=showtime_id)
            if showtime is None:
                raise NotFoundError('Showtime not found')

            await ensure_seats_bookable(booking_command_repo=repo, showtime=showtime, seats=seats)

            booking = Booking.create(
                user_id=user_id,
                showtime_id=showtime_id,
                seats=seats,
                unit_price=showtime.price,
            )
            created = await repo.create(booking=booking)
            await self.uow.commit()
            return created
