import time
from typing import List, Optional, Self

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
    SeatsUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.command.reservation_guard import ensure_seats_bookable
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.value_object.seat_selection import SeatSelection


class UpdateBookingUseCase:
    """
    Owner-only change of a booking's seat set and/or status.

    A seat swap follows the same locking protocol as booking creation, with the
    booking's own seats excluded from occupancy. Seats and status are applied
    in one transaction, seats first.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_booking(
        self,
        *,
        booking_id: int,
        user_id: int,
        seat_ids: Optional[List[int]] = None,
        status: Optional[BookingStatus] = None,
    ) -> Booking:
        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.update_booking',
            attributes={'booking.id': booking_id, 'user.id': user_id},
        ):
            try:
                if seat_ids is None and status is None:
                    raise DomainError('Nothing to update: provide seat_ids and/or status')
                seats = SeatSelection.of(seat_ids) if seat_ids is not None else None

                booking = await run_with_transaction_retry(
                    lambda: self._update_atomically(
                        booking_id=booking_id, user_id=user_id, seats=seats, status=status
                    ),
                    on_exhausted=SeatsUnavailableError,
                    operation_name='update_booking',
                )
            except SeatsUnavailableError:
                metrics.record_booking(
                    operation='update', result='conflict', duration=time.perf_counter() - start
                )
                raise
            except CustomBaseError:
                metrics.record_booking(
                    operation='update', result='rejected', duration=time.perf_counter() - start
                )
                raise

            metrics.record_booking(
                operation='update', result='updated', duration=time.perf_counter() - start
            )
            return booking

    async def _update_atomically(
        self,
        *,
        booking_id: int,
        user_id: int,
        seats: Optional[SeatSelection],
        status: Optional[BookingStatus],
    ) -> Booking:
        async with self.uow:
            repo = self.uow.booking_command_repo

            snapshot = await repo.get_by_id(booking_id=booking_id)
            if snapshot is None:
                raise NotFoundError('Booking not found')
            snapshot.ensure_owned_by(user_id)

            showtime = await repo.lock_showtime(showtime_id=snapshot.showtime_id)
            if showtime is None:
                raise NotFoundError('Showtime not found')

            # Re-read under the showtime lock
            booking = await repo.get_by_id(booking_id=booking_id, for_update=True)
            if booking is None:
                raise NotFoundError('Booking not found')

            if seats is not None:
                booking = booking.replace_seats(seats)
                await ensure_seats_bookable(
                    booking_command_repo=repo,
                    showtime=showtime,
                    seats=seats,
                    exclude_booking_id=booking_id,
                )
            if status is not None:
                booking = booking.transition_to(status)

            saved = await repo.update(booking=booking)
            await self.uow.commit()
            return saved
